import pytest
import numpy as np
import qutip

from openqs.hilbert import excited_state, ground_state
from openqs.settings import settings
from openqs.systems import (QuantumSystem, ramsey_atom, RamseySequence,
                            ramsey_fringes, ramsey_population_map,
                            ideal_ramsey_fringe, fringe_visibility)


class TestRamseyAtom:
    def test_atom(self):
        atom = ramsey_atom(detuning=0.7, rabi_frequency=3.0)
        assert isinstance(atom, QuantumSystem)
        assert atom.name == "Ramsey atom"
        assert atom.dimension == [[2], [2]]
        excited = atom.operators['excited']
        assert atom.hamiltonian == -0.7 * excited
        assert atom.operators['H_pulse'] == \
            -0.7 * excited + 1.5 * qutip.sigmax()
        assert atom.c_ops == []

    @pytest.mark.parametrize(["decay_rate", "dephasing_rate", "n_ops"], [
        (0.0, 0.0, 0),
        (0.2, 0.0, 1),
        (0.0, 0.3, 1),
        (0.2, 0.3, 2),
    ])
    def test_collapse_operators(self, decay_rate, dephasing_rate, n_ops):
        atom = ramsey_atom(0.0, 1.0, decay_rate, dephasing_rate)
        assert len(atom.c_ops) == n_ops
        assert atom.parameters["decay_rate"] == decay_rate
        assert atom.parameters["dephasing_rate"] == dephasing_rate

    def test_dephasing_rate_is_coherence_decay_rate(self):
        rate = 0.4
        atom = ramsey_atom(0.0, 1.0, dephasing_rate=rate)
        plus = (excited_state() + ground_state()).unit()
        tlist = np.linspace(0, 2, 21)
        sm = atom.operators['sigma_minus']
        _, coherence = atom.master(
            tlist, plus, fout=lambda t, rho: qutip.expect(sm, rho))
        np.testing.assert_allclose(np.abs(coherence),
                                   0.5 * np.exp(-rate * tlist), atol=1e-5)

    @pytest.mark.parametrize("kwargs", [
        {"decay_rate": -1.0}, {"dephasing_rate": -0.1},
    ])
    def test_negative_rates(self, kwargs):
        with pytest.raises(ValueError):
            ramsey_atom(0.0, 1.0, **kwargs)


class TestRamseySequence:
    def test_pulse_time(self):
        sequence = RamseySequence(ramsey_atom(0.0, 4.0), free_time=1.5)
        assert sequence.pulse_time == pytest.approx(np.pi / 8)
        assert sequence.total_time == pytest.approx(1.5 + np.pi / 4)
        labels = [label for label, _, _ in sequence.segments]
        assert labels == ["pulse", "free", "pulse"]

    @pytest.mark.parametrize(["rabi_frequency", "kwargs"], [
        pytest.param(0.0, {"free_time": 1.0}, id="no drive"),
        pytest.param(1.0, {"free_time": -1.0}, id="negative free time"),
        pytest.param(1.0, {"free_time": 1.0, "points": 1}, id="one point"),
        pytest.param(1.0, {"free_time": 1.0, "pulse_time": 0.0},
                     id="zero pulse"),
    ])
    def test_bad_arguments(self, rabi_frequency, kwargs):
        with pytest.raises(ValueError):
            RamseySequence(ramsey_atom(0.0, rabi_frequency), **kwargs)

    def test_explicit_pulse_time_without_drive(self):
        sequence = RamseySequence(ramsey_atom(0.0, 0.0), 1.0, pulse_time=0.5)
        assert sequence.total_time == pytest.approx(2.0)

    def test_time_grid(self):
        sequence = RamseySequence(ramsey_atom(0.0, 2.0), free_time=1.0,
                                  points=11)
        times, states = sequence.master()
        assert len(times) == 3 * 11 - 2
        assert len(states) == len(times)
        assert np.all(np.diff(times) > 0)
        assert times[0] == 0
        assert times[-1] == pytest.approx(sequence.total_time)

    def test_zero_free_time(self):
        sequence = RamseySequence(ramsey_atom(0.0, 2.0), free_time=0.0,
                                  points=11)
        times, _ = sequence.master()
        assert len(times) == 2 * 11 - 1

    def test_callback_called_once_per_reported_time(self):
        calls = []

        def fout(t, rho):
            calls.append(t)
            return t

        sequence = RamseySequence(ramsey_atom(0.3, 2.0, 0.1), 1.0, points=6)
        times, values = sequence.master(fout=fout)
        np.testing.assert_allclose(calls, times)
        np.testing.assert_allclose(values, times)

    def test_resonant_sequence_is_a_pi_pulse(self):
        atom = ramsey_atom(0.0, 5.0)
        excited = atom.operators['excited']
        sequence = RamseySequence(atom, free_time=2.0, points=21)
        times, p = sequence.master(
            fout=lambda t, rho: qutip.expect(excited, rho))
        after_first_pulse = np.argmin(np.abs(times - sequence.pulse_time))
        assert p[0] == pytest.approx(0)
        assert p[after_first_pulse] == pytest.approx(0.5, abs=1e-5)
        assert p[-1] == pytest.approx(1, abs=1e-5)

    def test_mcwf_without_losses_matches_master(self):
        atom = ramsey_atom(1.0, 5.0)
        excited = atom.operators['excited']
        sequence = RamseySequence(atom, free_time=1.0, points=11)
        _, p_master = sequence.master(
            fout=lambda t, rho: qutip.expect(excited, rho))
        _, p_mcwf = sequence.mcwf(
            fout=lambda t, psi: qutip.expect(excited, psi))
        np.testing.assert_allclose(p_mcwf, p_master, atol=1e-5)

    def test_mcwf_seeded(self):
        atom = ramsey_atom(1.0, 5.0, decay_rate=1.0)
        sequence = RamseySequence(atom, free_time=2.0, points=11)
        excited = atom.operators['excited']
        fout = (lambda t, psi: qutip.expect(excited, psi))
        _, first = sequence.mcwf(seed=3, fout=fout)
        _, second = sequence.mcwf(seed=3, fout=fout)
        np.testing.assert_allclose(first, second)


class TestFringes:
    free_time = 2.0
    detunings = np.linspace(-3, 3, 13)

    def test_short_pulses_follow_ideal_fringe(self):
        populations = ramsey_fringes(self.detunings, self.free_time, 100.0)
        assert populations.shape == self.detunings.shape
        np.testing.assert_allclose(
            populations, ideal_ramsey_fringe(self.detunings, self.free_time),
            atol=0.05,
        )

    def test_decay_reduces_visibility(self):
        clean = ramsey_fringes(self.detunings, self.free_time, 100.0)
        lossy = ramsey_fringes(self.detunings, self.free_time, 100.0,
                               decay_rate=0.5)
        assert fringe_visibility(lossy) < fringe_visibility(clean) - 0.1

    def test_dephasing_visibility(self):
        rate = 0.5
        detunings = np.linspace(-np.pi / 2, np.pi / 2, 3)
        populations = ramsey_fringes(detunings, self.free_time, 100.0,
                                     dephasing_rate=rate)
        assert fringe_visibility(populations) == \
            pytest.approx(np.exp(-rate * self.free_time), abs=0.05)

    @pytest.mark.parametrize("kwargs", [
        {"method": "euler"}, {"method": "mcwf", "ntraj": 0},
    ])
    def test_bad_arguments(self, kwargs):
        with pytest.raises(ValueError):
            ramsey_fringes(self.detunings, self.free_time, 100.0, **kwargs)

    def test_population_map(self):
        detunings = np.linspace(-2, 2, 5)
        times, populations = ramsey_population_map(
            detunings, self.free_time, 20.0, decay_rate=0.1, points=11)
        assert populations.shape == (5, len(times))
        final = ramsey_fringes(detunings, self.free_time, 20.0,
                               decay_rate=0.1)
        np.testing.assert_allclose(populations[:, -1], final, atol=1e-4)

    @pytest.mark.slow
    def test_mcwf_fringes_match_master(self):
        detunings = np.linspace(-3, 3, 7)
        master = ramsey_fringes(detunings, self.free_time, 20.0,
                                decay_rate=0.5)
        mcwf = ramsey_fringes(detunings, self.free_time, 20.0,
                              decay_rate=0.5, method="mcwf", ntraj=200,
                              seed=1)
        np.testing.assert_allclose(mcwf, master, atol=0.1)

    @pytest.mark.slow
    def test_parallel_map_matches_serial(self):
        args = ([0.0, 1.0, 2.0], 1.0, 20.0, 0.5)
        serial = ramsey_fringes(*args, method="mcwf", ntraj=4, seed=9)
        settings.map = "parallel"
        settings.num_cpus = 2
        parallel = ramsey_fringes(*args, method="mcwf", ntraj=4, seed=9)
        np.testing.assert_allclose(parallel, serial, atol=1e-8)

    def test_mcwf_fringes_seeded(self):
        detunings = [0.0, 1.0]
        first = ramsey_fringes(detunings, 1.0, 20.0, decay_rate=0.5,
                               method="mcwf", ntraj=3, seed=9)
        second = ramsey_fringes(detunings, 1.0, 20.0, decay_rate=0.5,
                                method="mcwf", ntraj=3, seed=9)
        np.testing.assert_allclose(first, second)


def test_ideal_fringe():
    np.testing.assert_allclose(
        ideal_ramsey_fringe([0.0, np.pi / 2, np.pi], 1.0), [1.0, 0.5, 0.0],
        atol=1e-12,
    )


@pytest.mark.parametrize(["populations", "expected"], [
    ([0.0, 1.0, 0.0], 1.0),
    ([0.25, 0.75], 0.5),
    ([0.0, 0.0], 0.0),
])
def test_fringe_visibility(populations, expected):
    assert fringe_visibility(populations) == pytest.approx(expected)
