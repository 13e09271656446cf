"""
Command line output of information on openqs and dependencies.
"""
__all__ = ['about']

import sys
import os
import platform
import inspect

import numpy
import scipy
import matplotlib
import qutip

import openqs
from openqs.settings import settings


def about():
    """
    About box for openqs. Gives version numbers for openqs, QuTiP, NumPy,
    SciPy, Matplotlib and Python, and the settings used for trajectory maps.
    """
    print("")
    print("openqs: open quantum system examples on QuTiP")
    print("=============================================")
    print("")
    print("openqs Version:     %s" % openqs.__version__)
    print("QuTiP Version:      %s" % qutip.__version__)
    print("Numpy Version:      %s" % numpy.__version__)
    print("Scipy Version:      %s" % scipy.__version__)
    print("Matplotlib Version: %s" % matplotlib.__version__)
    print("Python Version:     %d.%d.%d" % sys.version_info[0:3])
    print("Number of CPUs:     %s" % settings.num_cpus)
    print("Trajectory map:     %s" % settings.map)
    print("Platform Info:      %s (%s)" % (platform.system(),
                                           platform.machine()))
    install_path = os.path.dirname(inspect.getsourcefile(openqs))
    print("Installation path:  %s" % install_path)
    print()


if __name__ == "__main__":
    about()
