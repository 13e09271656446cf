"""
Functions for plotting the results of the examples: expectation values,
Monte Carlo trajectories, 3D surfaces and Ramsey fringes.
"""

__all__ = ['plot_expectation', 'plot_trajectories', 'plot_surface',
           'plot_fock_evolution', 'plot_ramsey_fringes']

import numpy as np

from .settings import settings
from .systems.pumped_cavity import fock_populations

import matplotlib.pyplot as plt
from matplotlib import cm


def _sequential_cmap():
    if settings.colorblind_safe:
        return cm.cividis
    else:
        return cm.viridis


def _line_colors(n):
    if settings.colorblind_safe:
        return [cm.cividis(x) for x in np.linspace(0, 0.9, max(n, 1))]
    return [f"C{i % 10}" for i in range(n)]


def _is_fig_and_ax(fig, ax, projection='2d'):
    if fig is None:
        if ax is None:
            fig = plt.figure()
            if projection == '2d':
                ax = fig.add_subplot(1, 1, 1)
            else:
                ax = fig.add_subplot(1, 1, 1, projection='3d')
        else:
            fig = ax.get_figure()
    else:
        if ax is None:
            if projection == '2d':
                ax = fig.add_subplot(1, 1, 1)
            else:
                ax = fig.add_subplot(1, 1, 1, projection='3d')

    return fig, ax


def _as_series(times, values):
    values = np.real(np.asarray(values))
    if values.ndim == 1:
        values = values[np.newaxis, :]
    if values.shape[-1] != len(times):
        raise ValueError(
            f"got {values.shape[-1]} values per series for {len(times)} times"
        )
    return values


def plot_expectation(times, values, labels=None, *, xlabel="time",
                     ylabel="expectation value", fig=None, ax=None):
    """
    Line plot of one or several expectation values against time.

    Parameters
    ----------
    times : array_like
        Time grid.

    values : array_like
        One series (1d) or several series (2d, one per row).

    labels : list of str, optional
        Legend entry of each series.

    xlabel, ylabel : str
        Axis labels.

    fig : a matplotlib Figure instance, optional
        The Figure canvas in which the plot will be drawn.

    ax : a matplotlib axes instance, optional
        The axes context in which the plot will be drawn.

    Returns
    -------
    fig, ax : tuple
        A tuple of the matplotlib figure and axes instances used to produce
        the figure.
    """
    fig, ax = _is_fig_and_ax(fig, ax)
    series = _as_series(times, values)
    if labels is not None and len(labels) != len(series):
        raise ValueError(
            f"got {len(labels)} labels for {len(series)} series"
        )
    colors = _line_colors(len(series))
    for idx, row in enumerate(series):
        label = labels[idx] if labels is not None else None
        ax.plot(times, row, color=colors[idx], label=label)
    ax.set_xlabel(xlabel, fontsize=12)
    ax.set_ylabel(ylabel, fontsize=12)
    if labels is not None:
        ax.legend()
    return fig, ax


def plot_trajectories(times, trajectories, *, average=None, reference=None,
                      xlabel="time", ylabel="expectation value",
                      fig=None, ax=None):
    """
    Plot single Monte Carlo trajectories together with their average and a
    master equation reference.

    Parameters
    ----------
    times : array_like
        Time grid.

    trajectories : array_like
        One row per trajectory.

    average : array_like, optional
        Trajectory average, drawn as a bold line.

    reference : array_like, optional
        Master equation result, drawn dashed.

    Returns
    -------
    fig, ax : tuple
    """
    fig, ax = _is_fig_and_ax(fig, ax)
    series = _as_series(times, trajectories)
    for idx, row in enumerate(series):
        ax.plot(times, row, color="0.6", lw=0.8,
                label="trajectories" if idx == 0 else None)
    if average is not None:
        ax.plot(times, _as_series(times, average)[0], color="C0", lw=2,
                label=f"MCWF average ({len(series)} shown)")
    if reference is not None:
        ax.plot(times, _as_series(times, reference)[0], "--", color="C3",
                lw=2, label="master equation")
    ax.set_xlabel(xlabel, fontsize=12)
    ax.set_ylabel(ylabel, fontsize=12)
    ax.legend()
    return fig, ax


def plot_surface(x, y, z, *, kind="surface", xlabel="", ylabel="",
                 zlabel="", cmap=None, fig=None, ax=None):
    """
    3D surface or wireframe plot of ``z[j, i]`` over ``x[i], y[j]``.

    Parameters
    ----------
    x, y : array_like
        Coordinates of the grid.

    z : array_like
        Values, shape ``(len(y), len(x))``.

    kind : str {'surface', 'wireframe'}, default: 'surface'

    cmap : a matplotlib colormap, optional
        Colormap of the surface.

    fig : a matplotlib Figure instance, optional

    ax : a matplotlib 3D axes instance, optional

    Returns
    -------
    fig, ax : tuple
    """
    if kind not in ("surface", "wireframe"):
        raise ValueError(
            f"kind must be 'surface' or 'wireframe', got {kind!r}"
        )
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.real(np.asarray(z))
    if z.shape != (len(y), len(x)):
        raise ValueError(
            f"z has shape {z.shape}, expected {(len(y), len(x))}"
        )
    fig, ax = _is_fig_and_ax(fig, ax, projection='3d')
    X, Y = np.meshgrid(x, y)
    if kind == "surface":
        cmap = cmap if cmap is not None else _sequential_cmap()
        ax.plot_surface(X, Y, z, cmap=cmap, rstride=1, cstride=1,
                        linewidth=0, antialiased=False)
    else:
        ax.plot_wireframe(X, Y, z, color="k", lw=0.5)
    ax.set_xlabel(xlabel, fontsize=12)
    ax.set_ylabel(ylabel, fontsize=12)
    ax.set_zlabel(zlabel, fontsize=12)
    return fig, ax


def plot_fock_evolution(times, states, *, kind="wireframe", max_photons=None,
                        fig=None, ax=None):
    """
    Photon-number distribution of an oscillator mode over time, as a 3D
    plot.

    Parameters
    ----------
    times : array_like
        Time grid.

    states : list of :class:`qutip.Qobj`
        Kets or density matrices at those times.

    max_photons : int, optional
        Largest photon number shown.

    Returns
    -------
    fig, ax : tuple
    """
    populations = fock_populations(states)
    if max_photons is not None:
        populations = populations[:, :max_photons + 1]
    photons = np.arange(populations.shape[1])
    return plot_surface(photons, times, populations, kind=kind,
                        xlabel="photon number", ylabel="time",
                        zlabel="probability", fig=fig, ax=ax)


def plot_ramsey_fringes(detunings, populations, *, reference=None,
                        labels=None, fig=None, ax=None):
    """
    Excited population at the end of a Ramsey sequence against detuning.

    Parameters
    ----------
    detunings : array_like
        Scanned detunings.

    populations : array_like
        One fringe (1d) or several fringes (2d, one per row).

    reference : array_like, optional
        Reference fringe, drawn dashed.

    labels : list of str, optional

    Returns
    -------
    fig, ax : tuple
    """
    fig, ax = plot_expectation(detunings, populations, labels=labels,
                               xlabel="detuning",
                               ylabel="excited population", fig=fig, ax=ax)
    if reference is not None:
        ax.plot(detunings, np.asarray(reference), "--", color="k", lw=1,
                label="ideal")
        ax.legend()
    ax.set_ylim(-0.05, 1.05)
    return fig, ax
