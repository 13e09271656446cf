"""
Ramsey spectroscopy of a two-level atom.

The atom is probed by a laser detuned by ``detuning`` from the atomic
transition. In the frame rotating at the laser frequency

    H0 = -detuning * |e><e|                   (free precession)
    H_pulse = H0 + rabi_frequency * sigma_x / 2   (laser on)

A Ramsey sequence is a pi/2 pulse, a free precession time ``T`` and a second
pi/2 pulse. For short pulses and no losses the excited population at the end
oscillates as ``(1 + cos(detuning * T)) / 2`` with the detuning (Ramsey
fringes); spontaneous decay and dephasing wash the fringes out.
"""

__all__ = ['ramsey_atom', 'RamseySequence', 'ramsey_fringes',
           'ramsey_population_map', 'ideal_ramsey_fringe',
           'fringe_visibility']

import numpy as np
import qutip

from .. import evolution
from ..hilbert import spin_operators, ground_state
from ..settings import settings
from .quantum_system import QuantumSystem
import openqs.logging_utils as logging
logger = logging.get_logger('openqs.systems.ramsey')


def ramsey_atom(detuning: float, rabi_frequency: float,
                decay_rate: float = 0.0,
                dephasing_rate: float = 0.0) -> QuantumSystem:
    """
    Create the two-level atom probed in a Ramsey experiment.

    The free Hamiltonian is stored as ``hamiltonian``, the Hamiltonian with
    the laser on as ``operators['H_pulse']``.

    Parameters:
    -----------
    detuning : float
        Laser frequency minus atomic transition frequency
    rabi_frequency : float
        Rabi frequency of the pulses
    decay_rate : float, default=0.0
        Spontaneous emission rate (1/T1)
    dephasing_rate : float, default=0.0
        Pure dephasing rate of the atomic coherence

    Returns:
    --------
    QuantumSystem instance configured as Ramsey atom
    """
    for name, rate in (("decay_rate", decay_rate),
                       ("dephasing_rate", dephasing_rate)):
        if rate < 0:
            raise ValueError(f"{name} must be non-negative, got {rate}")

    operators = spin_operators()
    operators['drive'] = 0.5 * (operators['sigma_plus']
                                + operators['sigma_minus'])
    hamiltonian = -detuning * operators['excited']
    operators['H_pulse'] = hamiltonian + rabi_frequency * operators['drive']

    c_ops = []
    if decay_rate > 0.0:
        c_ops.append(np.sqrt(decay_rate) * operators['sigma_minus'])
    if dephasing_rate > 0.0:
        # sigma_z jumps damp the coherence at twice their rate
        c_ops.append(np.sqrt(dephasing_rate / 2) * operators['sigma_z'])

    latex = (r"H = -\delta \sigma_+\sigma_- "
             r"+ \frac{\Omega(t)}{2}(\sigma_+ + \sigma_-)")

    return QuantumSystem(
        hamiltonian=hamiltonian,
        name="Ramsey atom",
        operators=operators,
        c_ops=c_ops,
        latex=latex,
        detuning=detuning,
        rabi_frequency=rabi_frequency,
        decay_rate=decay_rate,
        dephasing_rate=dephasing_rate,
    )


class RamseySequence:
    """
    pi/2 pulse, free precession, pi/2 pulse applied to a Ramsey atom.

    The evolution is computed segment by segment, the final state of a
    segment being the initial state of the next one. The time grid of every
    segment has ``points`` points and segment boundaries appear once in the
    returned times.

    Parameters
    ----------
    atom : :class:`QuantumSystem`
        System created by :func:`ramsey_atom`.

    free_time : float
        Duration of the free precession.

    pulse_time : float, optional
        Duration of each pulse. Defaults to the pi/2 time
        ``pi / (2 * rabi_frequency)``.

    points : int, default: 51
        Number of reported times per segment.
    """
    def __init__(self, atom, free_time, *, pulse_time=None, points=51):
        if free_time < 0:
            raise ValueError(f"free_time must be non-negative, got {free_time}")
        if points < 2:
            raise ValueError("a segment needs at least two points")
        if pulse_time is None:
            rabi_frequency = atom.parameters.get("rabi_frequency", 0.0)
            if rabi_frequency <= 0:
                raise ValueError(
                    "the pi/2 pulse time needs a positive Rabi frequency"
                )
            pulse_time = np.pi / (2 * rabi_frequency)
        elif pulse_time <= 0:
            raise ValueError(f"pulse_time must be positive, got {pulse_time}")
        self.atom = atom
        self.free_time = float(free_time)
        self.pulse_time = float(pulse_time)
        self.points = int(points)

    @property
    def segments(self):
        """List of ``(label, hamiltonian, duration)``."""
        H_pulse = self.atom.operators['H_pulse']
        return [
            ("pulse", H_pulse, self.pulse_time),
            ("free", self.atom.hamiltonian, self.free_time),
            ("pulse", H_pulse, self.pulse_time),
        ]

    @property
    def total_time(self):
        return 2 * self.pulse_time + self.free_time

    def _chain(self, evolve, state, fout):
        times_out = []
        values_out = []
        t0 = 0.0
        for k, (label, hamiltonian, duration) in enumerate(self.segments):
            if duration == 0:
                continue
            tlist = t0 + np.linspace(0, duration, self.points)
            first = not times_out
            last = {}

            def record(t, state, start=tlist[0], first=first, last=last):
                last['state'] = state
                if fout is None:
                    return state
                if t == start and not first:
                    # reported as the end of the previous segment
                    return None
                return fout(t, state)

            logger.debug("segment %d (%s): t=%g..%g", k, label, tlist[0],
                         tlist[-1])
            times, values = evolve(k, tlist, state, hamiltonian, record)
            skip = 0 if first else 1
            times_out.extend(times[skip:])
            values_out.extend(values[skip:])
            state = last['state']
            t0 = tlist[-1]
        return np.array(times_out), values_out

    def master(self, rho0=None, *, fout=None, options=None):
        """
        Master equation evolution through the sequence.

        Parameters
        ----------
        rho0 : :class:`qutip.Qobj`, optional
            Initial state, ground level by default.

        fout : callable, optional
            Per-step callback ``fout(t, rho)``.

        Returns
        -------
        times, values : ndarray, list
        """
        if rho0 is None:
            rho0 = ground_state()
        c_ops = self.atom.c_ops

        def evolve(k, tlist, state, hamiltonian, record):
            return evolution.master(tlist, state, hamiltonian, c_ops,
                                    fout=record, options=options)

        return self._chain(evolve, rho0, fout)

    def mcwf(self, psi0=None, *, seed=None, fout=None, options=None):
        """
        One Monte Carlo wave-function trajectory through the sequence.

        The seeds of the three segments are spawned from ``seed``.

        Returns
        -------
        times, values : ndarray, list
        """
        if psi0 is None:
            psi0 = ground_state()
        c_ops = self.atom.c_ops
        seeds = _seed_sequence(seed).spawn(len(self.segments))

        def evolve(k, tlist, state, hamiltonian, record):
            return evolution.mcwf(tlist, state, hamiltonian, c_ops,
                                  seed=seeds[k], fout=record,
                                  options=options)

        return self._chain(evolve, psi0, fout)


def _seed_sequence(seed):
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


def _final_population(point, free_time, rabi_frequency, decay_rate,
                      dephasing_rate, method, ntraj, pulse_time):
    detuning, seed = point
    atom = ramsey_atom(detuning, rabi_frequency, decay_rate, dephasing_rate)
    sequence = RamseySequence(atom, free_time, pulse_time=pulse_time,
                              points=2)
    excited = atom.operators['excited']
    if method == "master":
        _, states = sequence.master()
        return qutip.expect(excited, states[-1])
    total = 0.0
    for traj_seed in seed.spawn(ntraj):
        _, states = sequence.mcwf(seed=traj_seed)
        total += qutip.expect(excited, states[-1])
    return total / ntraj


def ramsey_fringes(detunings, free_time, rabi_frequency, decay_rate=0.0,
                   dephasing_rate=0.0, *, method="master", ntraj=100,
                   seed=None, pulse_time=None):
    """
    Excited population at the end of a Ramsey sequence for each detuning.

    Parameters
    ----------
    detunings : array_like
        Laser detunings to scan.

    free_time : float
        Free precession time.

    rabi_frequency : float
        Rabi frequency of the pulses.

    decay_rate, dephasing_rate : float
        Loss rates of the atom.

    method : str {"master", "mcwf"}
        Master equation, or average over ``ntraj`` MCWF trajectories.

    seed : int, optional
        Seed of the MCWF trajectories.

    Returns
    -------
    populations : ndarray
    """
    if method not in ("master", "mcwf"):
        raise ValueError(
            f"method must be 'master' or 'mcwf', got {method!r}"
        )
    if method == "mcwf" and (int(ntraj) != ntraj or ntraj < 1):
        raise ValueError(f"ntraj must be a positive integer, got {ntraj!r}")
    detunings = np.atleast_1d(np.asarray(detunings, dtype=float))
    seeds = _seed_sequence(seed).spawn(len(detunings))
    if settings.map == "parallel":
        map_func, map_kw = qutip.parallel_map, {"num_cpus": settings.num_cpus}
    else:
        map_func, map_kw = qutip.serial_map, {}
    logger.debug("ramsey_fringes: %d detunings, method=%s",
                 len(detunings), method)
    populations = map_func(
        _final_population, list(zip(detunings, seeds)),
        task_args=(free_time, rabi_frequency, decay_rate, dephasing_rate,
                   method, int(ntraj), pulse_time),
        map_kw=map_kw,
        progress_bar=settings.progress_bar,
    )
    return np.array(populations, dtype=float)


def ramsey_population_map(detunings, free_time, rabi_frequency,
                          decay_rate=0.0, dephasing_rate=0.0, *, points=51,
                          pulse_time=None):
    """
    Excited population during the Ramsey sequence for each detuning, from
    the master equation.

    Returns
    -------
    times, populations : ndarray, ndarray
        ``populations[i, j]`` is the excited population at ``times[j]`` for
        ``detunings[i]``.
    """
    detunings = np.atleast_1d(np.asarray(detunings, dtype=float))
    times = None
    rows = []
    for detuning in detunings:
        atom = ramsey_atom(detuning, rabi_frequency, decay_rate,
                           dephasing_rate)
        excited = atom.operators['excited']
        sequence = RamseySequence(atom, free_time, pulse_time=pulse_time,
                                  points=points)
        times, values = sequence.master(
            fout=lambda t, rho: qutip.expect(excited, rho)
        )
        rows.append(values)
    return times, np.real(np.array(rows))


def ideal_ramsey_fringe(detunings, free_time):
    """Fringe of infinitely short pulses without losses."""
    detunings = np.asarray(detunings, dtype=float)
    return 0.5 * (1 + np.cos(detunings * free_time))


def fringe_visibility(populations):
    """(max - min) / (max + min) of a fringe."""
    populations = np.asarray(populations, dtype=float)
    high, low = populations.max(), populations.min()
    if high + low == 0:
        return 0.0
    return (high - low) / (high + low)
