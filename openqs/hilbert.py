"""
Bases, operators and states of the finite Hilbert spaces used by the
examples: a truncated Fock space for the cavity mode and a spin-1/2 for the
two-level atom.

The excited level of the atom is ``basis(2, 0)`` and the ground level
``basis(2, 1)``, following QuTiP's convention for ``sigmaz``.
"""

__all__ = ['fock_operators', 'spin_operators', 'fock_state',
           'coherent_state', 'excited_state', 'ground_state', 'embed',
           'expect_values']

import numpy as np
import qutip


def _check_cutoff(cutoff):
    if int(cutoff) != cutoff or cutoff < 2:
        raise ValueError(
            f"the Fock cutoff must be an integer >= 2, got {cutoff!r}"
        )
    return int(cutoff)


def fock_operators(cutoff):
    """
    Ladder and number operators of an oscillator truncated to ``cutoff``
    photon-number states (``0 .. cutoff-1``).

    Returns
    -------
    ops : dict
        ``a``, ``a_dag`` and ``n``.
    """
    cutoff = _check_cutoff(cutoff)
    a = qutip.destroy(cutoff)
    a_dag = a.dag()
    return {'a': a, 'a_dag': a_dag, 'n': a_dag * a}


def spin_operators():
    """
    Pauli and ladder operators of a spin-1/2.

    Returns
    -------
    ops : dict
        ``sigma_minus``, ``sigma_plus``, ``sigma_x``, ``sigma_y``,
        ``sigma_z`` and ``excited``, the projector on the excited level.
    """
    sigma_minus = qutip.sigmam()
    sigma_plus = qutip.sigmap()
    return {
        'sigma_minus': sigma_minus,
        'sigma_plus': sigma_plus,
        'sigma_x': qutip.sigmax(),
        'sigma_y': qutip.sigmay(),
        'sigma_z': qutip.sigmaz(),
        'excited': sigma_plus * sigma_minus,
    }


def fock_state(cutoff, n):
    """Photon-number state ``|n>`` in a Fock space of dimension ``cutoff``."""
    cutoff = _check_cutoff(cutoff)
    if not 0 <= n < cutoff:
        raise ValueError(
            f"photon number {n} outside the truncated space 0..{cutoff - 1}"
        )
    return qutip.basis(cutoff, n)


def coherent_state(cutoff, alpha):
    """Coherent state of amplitude ``alpha`` in a truncated Fock space."""
    cutoff = _check_cutoff(cutoff)
    return qutip.coherent(cutoff, alpha)


def excited_state():
    return qutip.basis(2, 0)


def ground_state():
    return qutip.basis(2, 1)


def embed(dims, indices, ops):
    """
    Embed operators acting on single subsystems into the composite space
    ``tensor(dims)``, with identities on the remaining subsystems.

    Parameters
    ----------
    dims : list of int
        Dimension of every subsystem.

    indices : int or sequence of int
        Subsystem(s) the operator(s) act on.

    ops : :class:`qutip.Qobj` or sequence of :class:`qutip.Qobj`
        One operator per index.

    Returns
    -------
    op : :class:`qutip.Qobj`
        Operator on the composite space.

    Examples
    --------
    Cavity annihilation and atomic lowering operators of a cavity with
    10 Fock states coupled to an atom::

        a = embed([10, 2], 0, destroy(10))
        sm = embed([10, 2], 1, sigmam())
    """
    dims = [int(d) for d in dims]
    if np.ndim(indices) != 0:
        indices = [int(i) for i in indices]
        if isinstance(ops, qutip.Qobj) or len(ops) != len(indices):
            raise ValueError("embed needs one operator per index")
        ops = list(ops)
    else:
        indices = [int(indices)]
        ops = [ops]
    if len(set(indices)) != len(indices):
        raise ValueError(f"duplicate subsystem indices {indices}")

    factors = [qutip.qeye(d) for d in dims]
    for index, op in zip(indices, ops):
        if not 0 <= index < len(dims):
            raise ValueError(
                f"subsystem index {index} out of range for {len(dims)} "
                "subsystems"
            )
        if op.shape != (dims[index], dims[index]):
            raise ValueError(
                f"operator of shape {op.shape} does not act on subsystem "
                f"{index} of dimension {dims[index]}"
            )
        factors[index] = op
    return qutip.tensor(factors)


def expect_values(op, states):
    """
    Expectation values of ``op`` for a list of kets or density matrices.
    The result is real when ``op`` is Hermitian.
    """
    values = np.asarray(qutip.expect(op, list(states)))
    if op.isherm:
        return np.real(values)
    return values
