"""
Open quantum systems of the worked examples
"""

from .quantum_system import QuantumSystem
from .pumped_cavity import (pumped_cavity, steady_state_amplitude,
                            steady_state_photon_number, fock_populations)
from .ramsey import (ramsey_atom, RamseySequence, ramsey_fringes,
                     ramsey_population_map, ideal_ramsey_fringe,
                     fringe_visibility)

__all__ = ['QuantumSystem', 'pumped_cavity', 'steady_state_amplitude',
           'steady_state_photon_number', 'fock_populations', 'ramsey_atom',
           'RamseySequence', 'ramsey_fringes', 'ramsey_population_map',
           'ideal_ramsey_fringe', 'fringe_visibility']
