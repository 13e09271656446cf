"""
Thin wrappers around the QuTiP time-evolution solvers used by the examples.

``master`` integrates the Lindblad master equation, ``mcwf`` computes one
Monte Carlo wave-function trajectory, ``mcwf_average`` and ``mcwf_expect``
average many of them.  The integration itself is done by QuTiP; these
functions only validate the inputs, step the solvers through the requested
time grid and call an optional per-step callback ``fout(t, state)``.
"""

__all__ = ['master', 'mcwf', 'mcwf_average', 'mcwf_expect',
           'TrajectoryAverage']

import numpy as np
import qutip

from .settings import settings
import openqs.logging_utils as logging
logger = logging.get_logger('openqs.evolution')


def _check_tlist(tlist):
    tlist = np.asarray(tlist, dtype=float)
    if tlist.ndim != 1 or tlist.size < 2:
        raise ValueError("tlist must be a 1d array with at least two times")
    if not np.all(np.isfinite(tlist)):
        raise ValueError("tlist must only contain finite times")
    if np.any(np.diff(tlist) <= 0):
        raise ValueError("tlist must be strictly increasing")
    return tlist


def _as_list(c_ops):
    if c_ops is None:
        return []
    if isinstance(c_ops, (qutip.Qobj, qutip.QobjEvo)):
        return [c_ops]
    return list(c_ops)


def _check_ntraj(ntraj):
    if int(ntraj) != ntraj or ntraj < 1:
        raise ValueError(f"ntraj must be a positive integer, got {ntraj!r}")
    return int(ntraj)


def _step_through(solver, tlist, state0, fout, **start_kw):
    """
    Run ``solver`` along ``tlist`` with the step interface, calling ``fout``
    once per time.
    """
    solver.start(state0, tlist[0], **start_kw)
    out = [fout(tlist[0], state0) if fout is not None else state0]
    for t in tlist[1:]:
        state = solver.step(t)
        out.append(fout(t, state) if fout is not None else state)
    return out


def master(tlist, rho0, H, c_ops=None, *, fout=None, options=None):
    """
    Master equation evolution of a density matrix.

    Parameters
    ----------
    tlist : array_like
        Times at which the state is reported. Must be strictly increasing;
        the evolution starts at ``tlist[0]``.

    rho0 : :class:`qutip.Qobj`
        Initial density matrix. A ket is turned into the corresponding pure
        density matrix.

    H : :class:`qutip.Qobj`
        System Hamiltonian.

    c_ops : :class:`qutip.Qobj` or list of :class:`qutip.Qobj`, optional
        Collapse (jump) operators, rates included.

    fout : callable, optional
        Called as ``fout(t, rho)`` for every time in ``tlist``. When given,
        its return values are returned instead of the density matrices.

    options : dict, optional
        Options passed to :class:`qutip.MESolver` (``atol``, ``rtol``,
        ``method``, ``max_step``...).

    Returns
    -------
    times, values : ndarray, list
        The time grid and the density matrices, or the ``fout`` outputs, at
        those times.
    """
    tlist = _check_tlist(tlist)
    if not isinstance(rho0, qutip.Qobj):
        raise TypeError("the initial state must be a Qobj")
    if rho0.isket:
        rho0 = qutip.ket2dm(rho0)
    c_ops = _as_list(c_ops)
    logger.debug("master: dims=%s, %d collapse operators, %d times",
                 H.dims, len(c_ops), len(tlist))
    solver = qutip.MESolver(H, c_ops, options=options)
    return tlist, _step_through(solver, tlist, rho0, fout)


def mcwf(tlist, psi0, H, c_ops=None, *, seed=None, fout=None, options=None):
    """
    Compute one Monte Carlo wave-function trajectory.

    Between jumps the ket evolves with the non-Hermitian effective
    Hamiltonian ``H - i/2 sum(c^dag c)``; jumps are applied at random times
    drawn by QuTiP from the seeded generator. The reported kets are
    normalised.

    Parameters
    ----------
    tlist : array_like
        Times at which the state is reported.

    psi0 : :class:`qutip.Qobj`
        Initial ket.

    H : :class:`qutip.Qobj`
        System Hamiltonian.

    c_ops : :class:`qutip.Qobj` or list of :class:`qutip.Qobj`, optional
        Collapse operators. Without any, the trajectory is the Schrödinger
        evolution of ``psi0``.

    seed : int or :class:`numpy.random.SeedSequence`, optional
        Seed of the random number generator. The same seed gives the same
        trajectory.

    fout : callable, optional
        Called as ``fout(t, psi)`` for every time in ``tlist``; its outputs
        replace the kets in the returned values.

    options : dict, optional
        Options passed to :class:`qutip.MCSolver`.

    Returns
    -------
    times, values : ndarray, list
        The time grid and the trajectory kets, or the ``fout`` outputs.
    """
    tlist = _check_tlist(tlist)
    if not isinstance(psi0, qutip.Qobj) or not psi0.isket:
        raise TypeError("mcwf needs a ket as initial state")
    c_ops = _as_list(c_ops)
    if not c_ops:
        logger.debug("mcwf: no collapse operator, Schrodinger evolution")
        solver = qutip.SESolver(H, options=options)
        return tlist, _step_through(solver, tlist, psi0, fout)
    logger.debug("mcwf: dims=%s, %d collapse operators, seed=%s",
                 H.dims, len(c_ops), seed)
    solver = qutip.MCSolver(H, c_ops, options=options)
    return tlist, _step_through(solver, tlist, psi0, fout, seed=seed)


class TrajectoryAverage:
    """
    Average of a per-step callback over Monte Carlo trajectories.

    Attributes
    ----------
    times : ndarray
        Time grid.
    average : ndarray
        Mean of the callback outputs, first axis is time.
    std : ndarray
        Standard deviation over trajectories.
    ntraj : int
        Number of trajectories.
    seeds : list of :class:`numpy.random.SeedSequence`
        Seed of every trajectory, in the order of ``runs``.
    runs : ndarray or None
        Outputs of every trajectory (first axis is the trajectory), kept only
        when requested.
    """
    def __init__(self, times, runs, seeds, keep_runs=False):
        runs = np.asarray(runs)
        self.times = times
        self.ntraj = runs.shape[0]
        self.seeds = seeds
        self.average = runs.mean(axis=0)
        self.std = runs.std(axis=0)
        self.runs = runs if keep_runs else None

    @property
    def standard_error(self):
        """Standard error of the mean."""
        return self.std / np.sqrt(self.ntraj)

    def __repr__(self):
        return (f"TrajectoryAverage(ntraj={self.ntraj}, "
                f"times=[{self.times[0]}, ..., {self.times[-1]}], "
                f"shape={self.average.shape})")


def _one_trajectory(seed, tlist, psi0, H, c_ops, fout, options):
    _, values = mcwf(tlist, psi0, H, c_ops, seed=seed, fout=fout,
                     options=options)
    return np.asarray(values)


def _get_map():
    if settings.map == "parallel":
        return qutip.parallel_map, {"num_cpus": settings.num_cpus}
    return qutip.serial_map, {}


def mcwf_average(tlist, psi0, H, c_ops, fout, *, ntraj, seed=None,
                 keep_runs=False, options=None):
    """
    Average the per-step callback ``fout`` over ``ntraj`` MCWF trajectories.

    The trajectory seeds are spawned from a single
    :class:`numpy.random.SeedSequence`, so a given ``seed`` always yields the
    same set of trajectories. ``fout`` must return numbers or arrays of a
    fixed shape. Trajectories are run through ``qutip.serial_map`` or
    ``qutip.parallel_map`` depending on ``openqs.settings.map``; in parallel
    mode ``fout`` must be picklable.

    Returns
    -------
    result : :class:`TrajectoryAverage`
    """
    tlist = _check_tlist(tlist)
    ntraj = _check_ntraj(ntraj)
    if fout is None:
        raise ValueError("mcwf_average needs a callback fout(t, psi)")
    c_ops = _as_list(c_ops)
    seeds = np.random.SeedSequence(seed).spawn(ntraj)
    map_func, map_kw = _get_map()
    logger.debug("mcwf_average: %d trajectories with %s", ntraj,
                 map_func.__name__)
    runs = map_func(
        _one_trajectory, seeds,
        task_args=(tlist, psi0, H, c_ops, fout, options),
        map_kw=map_kw,
        progress_bar=settings.progress_bar,
    )
    return TrajectoryAverage(tlist, runs, seeds, keep_runs=keep_runs)


def mcwf_expect(tlist, psi0, H, c_ops, e_ops, *, ntraj, seed=None,
                options=None):
    """
    Trajectory-averaged expectation values computed by ``qutip.mcsolve``.

    Parameters
    ----------
    e_ops : :class:`qutip.Qobj` or list of :class:`qutip.Qobj`
        Operators whose expectation values are accumulated.

    ntraj : int
        Number of trajectories.

    seed : int, optional
        Seed from which QuTiP spawns the trajectory seeds.

    Returns
    -------
    result : :class:`qutip.McResult`
        ``result.expect`` holds the averaged expectation values,
        ``result.std_expect`` their standard deviation.
    """
    tlist = _check_tlist(tlist)
    ntraj = _check_ntraj(ntraj)
    c_ops = _as_list(c_ops)
    if not c_ops:
        raise ValueError("mcwf_expect needs at least one collapse operator")
    solver_options = {
        "map": settings.map,
        "num_cpus": settings.num_cpus,
        "progress_bar": settings.progress_bar,
    }
    solver_options.update(options or {})
    logger.debug("mcwf_expect: %d trajectories, seed=%s", ntraj, seed)
    return qutip.mcsolve(H, psi0, tlist, c_ops, e_ops=_as_list(e_ops),
                         ntraj=ntraj, seeds=seed, options=solver_options)
