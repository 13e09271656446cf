"""
Coherently pumped, damped cavity mode.

In the frame rotating at the pump frequency the cavity is described by

    H = detuning * a^dag a + pump * (a + a^dag)

and loses photons through the jump operator ``sqrt(2 * decay_rate) * a``, so
the field amplitude decays at ``decay_rate`` and the photon number at twice
that rate. The steady state is the coherent state of amplitude
``-1j * pump / (decay_rate + 1j * detuning)``.
"""

__all__ = ['pumped_cavity', 'steady_state_amplitude',
           'steady_state_photon_number', 'fock_populations']

import numpy as np
import qutip

from ..hilbert import fock_operators
from .quantum_system import QuantumSystem


def pumped_cavity(cutoff: int = 40, detuning: float = 0.0, pump: float = 4.0,
                  decay_rate: float = 1.0) -> QuantumSystem:
    """
    Create a pumped cavity truncated to ``cutoff`` Fock states.

    H = detuning * a_dag * a + pump * (a + a_dag)

    Parameters:
    -----------
    cutoff : int, default=40
        Number of Fock states kept (photon numbers 0 .. cutoff-1)
    detuning : float, default=0.0
        Cavity frequency minus pump frequency
    pump : float, default=4.0
        Pump strength eta
    decay_rate : float, default=1.0
        Field decay rate kappa; photons leak out at 2 * kappa

    Returns:
    --------
    QuantumSystem instance configured as pumped cavity
    """
    if decay_rate < 0:
        raise ValueError(f"decay_rate must be non-negative, got {decay_rate}")
    operators = fock_operators(cutoff)
    a, a_dag = operators['a'], operators['a_dag']

    hamiltonian = detuning * operators['n'] + pump * (a + a_dag)

    c_ops = []
    if decay_rate > 0:
        c_ops.append(np.sqrt(2 * decay_rate) * a)

    latex = r"H = \Delta a^\dagger a + \eta (a + a^\dagger)"

    return QuantumSystem(
        hamiltonian=hamiltonian,
        name="Pumped cavity",
        operators=operators,
        c_ops=c_ops,
        latex=latex,
        cutoff=int(cutoff),
        detuning=detuning,
        pump=pump,
        decay_rate=decay_rate,
    )


def steady_state_amplitude(system: QuantumSystem) -> complex:
    """
    Coherent amplitude the field relaxes to, neglecting the truncation.
    """
    detuning = system.parameters["detuning"]
    decay_rate = system.parameters["decay_rate"]
    pump = system.parameters["pump"]
    if decay_rate == 0 and detuning == 0:
        raise ValueError(
            "a resonant cavity without losses has no steady state"
        )
    return -1j * pump / (decay_rate + 1j * detuning)


def steady_state_photon_number(system: QuantumSystem) -> float:
    """pump**2 / (detuning**2 + decay_rate**2)"""
    return abs(steady_state_amplitude(system))**2


def fock_populations(states) -> np.ndarray:
    """
    Photon-number probabilities of a list of kets or density matrices.

    Returns
    -------
    populations : ndarray
        ``populations[t, n]`` is the probability of ``n`` photons in
        ``states[t]``.
    """
    populations = []
    for state in states:
        if state.isket:
            state = qutip.ket2dm(state)
        populations.append(np.real(state.diag()))
    return np.array(populations)
