"""
Ramsey spectroscopy of a decaying two-level atom: fringes from the master
equation and from Monte Carlo wave-function trajectories, compared with the
ideal short-pulse fringe.
"""
import numpy as np
import matplotlib.pyplot as plt
import qutip

from openqs import (ramsey_atom, RamseySequence, ramsey_fringes,
                    ramsey_population_map, ideal_ramsey_fringe,
                    fringe_visibility, plot_expectation, plot_ramsey_fringes,
                    plot_surface)

#-------------------------------------------------------------------------------
# setup the calculation
#-------------------------------------------------------------------------------
omega = 10.0        # Rabi frequency of the pulses
gamma = 0.1         # spontaneous emission rate
T = 2.0             # free precession time
detunings = np.linspace(-4, 4, 81)
ntraj = 50
seed = 2

#-------------------------------------------------------------------------------
# one sequence at fixed detuning
#-------------------------------------------------------------------------------
atom = ramsey_atom(detuning=1.0, rabi_frequency=omega, decay_rate=gamma)
excited = atom.operators['excited']
sequence = RamseySequence(atom, T)


def excited_population(t, state):
    return qutip.expect(excited, state)


times, p_master = sequence.master(fout=excited_population)
_, p_single = sequence.mcwf(seed=seed, fout=excited_population)

fig, ax = plot_expectation(times, [p_master, p_single],
                           labels=["master equation", "one trajectory"],
                           ylabel="excited population")
fig.savefig('ramsey_sequence.png')
plt.close(fig)

#-------------------------------------------------------------------------------
# fringes
#-------------------------------------------------------------------------------
fringe_master = ramsey_fringes(detunings, T, omega, gamma)
fringe_mcwf = ramsey_fringes(detunings, T, omega, gamma, method="mcwf",
                             ntraj=ntraj, seed=seed)
print("visibility: %.3f (master), %.3f (mcwf)"
      % (fringe_visibility(fringe_master), fringe_visibility(fringe_mcwf)))

fig, ax = plot_ramsey_fringes(
    detunings, [fringe_master, fringe_mcwf],
    reference=ideal_ramsey_fringe(detunings, T),
    labels=["master equation", "MCWF, %d trajectories" % ntraj],
)
fig.savefig('ramsey_fringes.png')
plt.close(fig)

#-------------------------------------------------------------------------------
# excited population during the sequence
#-------------------------------------------------------------------------------
times, populations = ramsey_population_map(detunings[::4], T, omega, gamma,
                                           points=21)
fig, ax = plot_surface(times, detunings[::4], populations,
                       xlabel="time", ylabel="detuning",
                       zlabel="excited population")
fig.savefig('ramsey_population_map.png')
plt.close(fig)
