"""
Registry of the example simulations and the ``openqs`` command line.

Every demo builds the figure of one example section and returns it::

    >>> from openqs.demos import demos
    >>> fig = demos("pumped-cavity", ntraj=20)

From a shell::

    python -m openqs list
    python -m openqs run ramsey --ntraj 50 --output ramsey.png
"""

__all__ = ['demos', 'available_demos', 'main']

import argparse
import functools
import inspect
import sys

import numpy as np
import qutip

from .hilbert import fock_state
from .systems import (pumped_cavity, steady_state_photon_number,
                      ramsey_fringes, ramsey_population_map,
                      ideal_ramsey_fringe)
from .visualization import (plot_trajectories, plot_fock_evolution,
                            plot_ramsey_fringes, plot_surface)
import openqs.logging_utils as logging
logger = logging.get_logger('openqs.demos')

_DEMOS = {}


def _demo(name, description):
    def register(func):
        _DEMOS[name] = (description, func)
        return func
    return register


def _expect(op, t, state):
    return qutip.expect(op, state)


def _photon_number(n_op):
    return functools.partial(_expect, n_op)


@_demo("pumped-cavity",
       "photon number of a pumped cavity: master equation, one MCWF "
       "trajectory and the trajectory average")
def _pumped_cavity(cutoff=40, detuning=0.0, pump=4.0, decay_rate=1.0,
                   initial_photons=10, t_final=10.0, points=201, ntraj=10,
                   seed=2):
    system = pumped_cavity(cutoff, detuning, pump, decay_rate)
    tlist = np.linspace(0, t_final, points)
    psi0 = fock_state(cutoff, initial_photons)
    n_op = system.operators['n']

    _, n_master = system.master(tlist, psi0, fout=_photon_number(n_op))
    result = system.mcwf_average(tlist, psi0, _photon_number(n_op),
                                 ntraj=ntraj, seed=seed, keep_runs=True)

    fig, ax = plot_trajectories(tlist, result.runs, average=result.average,
                                reference=n_master, ylabel="photon number")
    ax.axhline(steady_state_photon_number(system), color="k", lw=0.5,
               ls=":")
    ax.set_title("Pumped cavity")
    return fig


@_demo("pumped-cavity-fock",
       "photon-number distribution of the pumped cavity over time "
       "(wireframe)")
def _pumped_cavity_fock(cutoff=40, detuning=0.0, pump=4.0, decay_rate=1.0,
                        initial_photons=10, t_final=10.0, points=51,
                        max_photons=30):
    system = pumped_cavity(cutoff, detuning, pump, decay_rate)
    tlist = np.linspace(0, t_final, points)
    _, states = system.master(tlist, fock_state(cutoff, initial_photons))
    fig, ax = plot_fock_evolution(tlist, states, max_photons=max_photons)
    ax.set_title("Photon-number distribution")
    return fig


@_demo("ramsey",
       "Ramsey fringes of a decaying atom: master equation, MCWF average "
       "and the ideal short-pulse fringe")
def _ramsey(detuning_range=4.0, points=41, free_time=2.0,
            rabi_frequency=10.0, decay_rate=0.1, dephasing_rate=0.0,
            ntraj=50, seed=2):
    detunings = np.linspace(-detuning_range, detuning_range, points)
    args = (detunings, free_time, rabi_frequency, decay_rate,
            dephasing_rate)
    master = ramsey_fringes(*args, method="master")
    mcwf = ramsey_fringes(*args, method="mcwf", ntraj=ntraj, seed=seed)
    fig, ax = plot_ramsey_fringes(
        detunings, [master, mcwf],
        reference=ideal_ramsey_fringe(detunings, free_time),
        labels=["master equation", f"MCWF ({ntraj} trajectories)"],
    )
    ax.set_title("Ramsey fringes")
    return fig


@_demo("ramsey-map",
       "excited population during the Ramsey sequence against time and "
       "detuning (surface)")
def _ramsey_map(detuning_range=4.0, detuning_points=41, free_time=2.0,
                rabi_frequency=10.0, decay_rate=0.1, dephasing_rate=0.0,
                points=21):
    detunings = np.linspace(-detuning_range, detuning_range,
                            detuning_points)
    times, populations = ramsey_population_map(
        detunings, free_time, rabi_frequency, decay_rate, dephasing_rate,
        points=points,
    )
    fig, ax = plot_surface(times, detunings, populations, kind="surface",
                           xlabel="time", ylabel="detuning",
                           zlabel="excited population")
    ax.set_title("Ramsey sequence")
    return fig


def available_demos():
    """Names and descriptions of the registered demos."""
    return {name: description
            for name, (description, _) in _DEMOS.items()}


def _demo_parameters(name):
    if name not in _DEMOS:
        return set()
    return set(inspect.signature(_DEMOS[name][1]).parameters)


def demos(name, **params):
    """
    Run the demo ``name`` and return its matplotlib figure.

    Parameters
    ----------
    name : str
        One of the keys of :func:`available_demos`.

    **params
        Overrides of the demo parameters (``ntraj``, ``seed``,
        ``cutoff``...).
    """
    if name not in _DEMOS:
        raise ValueError(
            f"unknown demo {name!r}, available demos: {', '.join(_DEMOS)}"
        )
    _, func = _DEMOS[name]
    unknown = sorted(set(params) - _demo_parameters(name))
    if unknown:
        raise ValueError(
            f"demo {name!r} has no parameter(s) {', '.join(unknown)}"
        )
    logger.debug("running demo %s with %s", name, params)
    return func(**params)


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="openqs",
        description="Open quantum system examples built on QuTiP.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="list the available demos")

    run = commands.add_parser("run", help="run a demo")
    run.add_argument("name", help="name of the demo")
    run.add_argument("-o", "--output",
                     help="save the figure to this file")
    run.add_argument("--ntraj", type=int,
                     help="number of Monte Carlo trajectories")
    run.add_argument("--seed", type=int, help="random seed")
    run.add_argument("--show", action="store_true",
                     help="open the figure in a window")

    commands.add_parser("about",
                        help="print version and installation information")
    return parser


def main(argv=None):
    """Entry point of ``python -m openqs``; returns the exit status."""
    args = _build_parser().parse_args(argv)

    if args.command == "list":
        for name, description in available_demos().items():
            print(f"{name:20s} {description}")
            print(f"{'':20s} parameters: "
                  f"{', '.join(sorted(_demo_parameters(name)))}")
        return 0

    if args.command == "about":
        from .about import about
        about()
        return 0

    overrides = {"ntraj": args.ntraj, "seed": args.seed}
    accepted = _demo_parameters(args.name)
    params = {}
    for key, value in overrides.items():
        if value is None:
            continue
        if key in accepted:
            params[key] = value
        elif args.name in _DEMOS:
            print(f"openqs: note: demo {args.name!r} has no {key} "
                  f"parameter, --{key} ignored", file=sys.stderr)
    try:
        fig = demos(args.name, **params)
    except ValueError as err:
        print(f"openqs: error: {err}", file=sys.stderr)
        return 1

    if args.output:
        fig.savefig(args.output)
        print(f"figure saved to {args.output}")
    if args.show:
        import matplotlib.pyplot as plt
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
