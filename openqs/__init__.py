"""
Worked open quantum system examples built on QuTiP: a pumped cavity and
Ramsey spectroscopy of a two-level atom, with master equation and Monte Carlo
wave-function evolution.
"""
import openqs.settings
from openqs.settings import settings
import openqs.version
from openqs.version import version as __version__

# -----------------------------------------------------------------------------
# Load the user configuration if present
#
import openqs.configrc
if openqs.configrc.has_openqs_rc():
    openqs.configrc.load_rc_config(settings)


# -----------------------------------------------------------------------------
# Load modules
#

from .hilbert import *
from .evolution import *
from .systems import *
from .visualization import *
from .about import *
