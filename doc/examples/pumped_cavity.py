"""
Pumped cavity: relaxation of a Fock state towards the coherent steady state,
computed with the master equation and with Monte Carlo wave-function
trajectories.
"""
import numpy as np
import matplotlib.pyplot as plt
import qutip

from openqs import (pumped_cavity, steady_state_photon_number, fock_state,
                    plot_trajectories, plot_fock_evolution)

#-------------------------------------------------------------------------------
# setup the calculation
#-------------------------------------------------------------------------------
cutoff = 40         # Fock states kept
kappa = 1.0         # field decay rate
eta = 4 * kappa     # pump strength
delta = 0.0         # cavity - pump detuning
ntraj = 10          # averaged trajectories
seed = 2

cavity = pumped_cavity(cutoff, detuning=delta, pump=eta, decay_rate=kappa)
cavity.pretty_print()

tlist = np.linspace(0, 10, 201)
psi0 = fock_state(cutoff, 10)
n = cavity.operators['n']


def photon_number(t, state):
    return qutip.expect(n, state)


#-------------------------------------------------------------------------------
# master equation, one trajectory and the trajectory average
#-------------------------------------------------------------------------------
_, n_master = cavity.master(tlist, psi0, fout=photon_number)
_, n_single = cavity.mcwf(tlist, psi0, seed=seed, fout=photon_number)
average = cavity.mcwf_average(tlist, psi0, photon_number, ntraj=ntraj,
                              seed=seed, keep_runs=True)

print("steady state photon number: %.3f (analytic %.3f)"
      % (n_master[-1], steady_state_photon_number(cavity)))

fig, ax = plot_trajectories(tlist, average.runs, average=average.average,
                            reference=n_master, ylabel="photon number")
ax.plot(tlist, n_single, color="C1", lw=1, label="seed %d" % seed)
ax.legend()
fig.savefig('pumped_cavity_photon_number.png')
plt.close(fig)

#-------------------------------------------------------------------------------
# photon-number distribution
#-------------------------------------------------------------------------------
_, states = cavity.master(tlist[::4], psi0)
fig, ax = plot_fock_evolution(tlist[::4], states, max_photons=30)
fig.savefig('pumped_cavity_fock.png')
plt.close(fig)
