import numpy as np
import qutip
from qutip import Qobj

from .. import evolution


class QuantumSystem:
    """
    Open quantum system used by the examples.

    Bundles the Hamiltonian, the named operators of the Hilbert space, the
    collapse operators (rates included) and the parameters the system was
    built from. Instances are created by factory functions such as
    :func:`pumped_cavity` and :func:`ramsey_atom`; the evolution methods
    forward to :mod:`openqs.evolution` with the system's Hamiltonian and
    collapse operators.
    """

    def __init__(self, hamiltonian: Qobj, name: str = "Quantum System",
                 operators: dict = None, c_ops: list = None,
                 latex: str = "", **kwargs):
        """
        Parameters:
        -----------
        hamiltonian : Qobj
            System Hamiltonian
        name : str
            Name of the quantum system
        operators : dict, optional
            Named operators of the system (ladder, Pauli, projectors...)
        c_ops : list, optional
            Collapse operators, ``sqrt(rate) * op``
        latex : str, optional
            LaTeX representation of the Hamiltonian
        **kwargs : dict
            Physical parameters the system was built from
        """
        self.name = name
        self.parameters = kwargs

        self.hamiltonian = hamiltonian
        self.operators = operators if operators is not None else {}
        self.c_ops = c_ops if c_ops is not None else []
        self.latex = latex

    @property
    def dimension(self) -> list:
        """Hilbert space dimensions in QuTiP's ``dims`` format"""
        return self.hamiltonian.dims if self.hamiltonian is not None else 0

    @property
    def eigenvalues(self) -> np.ndarray:
        return self.hamiltonian.eigenenergies()

    @property
    def eigenstates(self) -> tuple:
        return self.hamiltonian.eigenstates()

    @property
    def ground_state(self) -> Qobj:
        """Lowest eigenstate of the Hamiltonian"""
        _, states = self.eigenstates
        return states[0]

    @property
    def liouvillian(self) -> Qobj:
        """Lindblad superoperator built from the Hamiltonian and c_ops"""
        return qutip.liouvillian(self.hamiltonian, self.c_ops)

    def steady_state(self) -> Qobj:
        """Steady-state density matrix of the master equation"""
        return qutip.steadystate(self.hamiltonian, self.c_ops)

    def master(self, tlist, rho0, *, fout=None, options=None):
        """See :func:`openqs.evolution.master`."""
        return evolution.master(tlist, rho0, self.hamiltonian, self.c_ops,
                                fout=fout, options=options)

    def mcwf(self, tlist, psi0, *, seed=None, fout=None, options=None):
        """See :func:`openqs.evolution.mcwf`."""
        return evolution.mcwf(tlist, psi0, self.hamiltonian, self.c_ops,
                              seed=seed, fout=fout, options=options)

    def mcwf_average(self, tlist, psi0, fout, *, ntraj, seed=None,
                     keep_runs=False, options=None):
        """See :func:`openqs.evolution.mcwf_average`."""
        return evolution.mcwf_average(
            tlist, psi0, self.hamiltonian, self.c_ops, fout,
            ntraj=ntraj, seed=seed, keep_runs=keep_runs, options=options,
        )

    def pretty_print(self):
        """Pretty print system information"""
        print(f"Quantum System: {self.name}")
        print(f"Hilbert Space Dimension: {self.dimension}")
        print(f"Parameters: {self.parameters}")
        print(f"Operators: {', '.join(self.operators)}")
        print(f"Number of Collapse Operators: {len(self.c_ops)}")
        print(f"LaTeX: {self.latex}")

    def __repr__(self):
        return f"QuantumSystem(name='{self.name}', dim={self.dimension})"

    def _repr_latex_(self):
        """
        Jupyter LaTeX representation.
        Uses self.latex if provided, otherwise shows the system name.
        """
        if self.latex:
            s = self.latex.strip()
            if not (s.startswith("$") or s.startswith(
                    r"\[") or s.startswith(r"\begin{")):
                s = f"${s}$"
            return s
        return rf"$\text{{{self.name}}}$"
