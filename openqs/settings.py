"""
This module contains settings for the openqs graphics, trajectory mapping and
logging functionality.
"""
import os
import multiprocessing

__all__ = ['settings']


_LOG_HANDLERS = ("default", "basic", "stream", "null")
_MAPS = ("serial", "parallel")
_PROGRESS_BARS = ("", "text", "enhanced", "tqdm")


def _env_bool(var, default=False):
    """
    Get a boolean value from the environment variable `var`.  This evalutes to
    `default` if the environment variable is not present.  The false-y values
    are '0', 'false', 'none' and empty string, insensitive to case.  All other
    values are truth-y.
    """
    from_env = os.environ.get(var)
    if from_env is None:
        return default
    return from_env.lower() not in {'0', 'false', 'none', ''}


def available_cpu_count() -> int:
    """
    Get the number of cpus.
    It tries to only get the number available to openqs.
    """
    num_cpu = 0

    if 'OPENQS_NUM_PROCESSES' in os.environ:
        # We consider OPENQS_NUM_PROCESSES=0 as unset.
        num_cpu = int(os.environ['OPENQS_NUM_PROCESSES'])

    if num_cpu == 0 and 'SLURM_CPUS_PER_TASK' in os.environ:
        num_cpu = int(os.environ['SLURM_CPUS_PER_TASK'])

    if num_cpu == 0 and hasattr(os, 'sched_getaffinity'):
        num_cpu = len(os.sched_getaffinity(0))

    if num_cpu == 0:
        try:
            num_cpu = multiprocessing.cpu_count()
        except NotImplementedError:
            pass

    return num_cpu or 1


class Settings:
    """
    openqs's settings and options.
    """
    def __init__(self):
        self._debug = _env_bool("OPENQS_DEBUG")
        self._log_handler = "default"
        self._colorblind_safe = False
        self._map = "serial"
        self._num_cpus = 0
        self._progress_bar = ""

    @property
    def debug(self) -> bool:
        """ Whether loggers created by openqs emit debug messages. """
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = bool(value)

    @property
    def log_handler(self) -> str:
        """
        Handler policy of the loggers created by openqs:

        - 'default': 'basic' inside IPython, 'stream' otherwise.
        - 'basic': rely on ``logging.basicConfig``.
        - 'stream': a timestamped ``StreamHandler`` on each logger.
        - 'null': a ``NullHandler``, the user installs their own handlers.
        """
        return self._log_handler

    @log_handler.setter
    def log_handler(self, value: str) -> None:
        if value not in _LOG_HANDLERS:
            raise ValueError(
                f"log_handler must be one of {_LOG_HANDLERS}, got {value!r}"
            )
        self._log_handler = value

    @property
    def ipython(self) -> bool:
        """ Whether openqs is running in ipython. """
        try:
            __IPYTHON__
            return True
        except NameError:
            return False

    @property
    def colorblind_safe(self) -> bool:
        """
        Allow for a colorblind mode that uses different colormaps
        and plotting options by default.
        """
        return self._colorblind_safe

    @colorblind_safe.setter
    def colorblind_safe(self, value: bool) -> None:
        self._colorblind_safe = bool(value)

    @property
    def map(self) -> str:
        """
        How trajectory averages and parameter scans are run: 'serial' runs
        them in this process, 'parallel' uses ``qutip.parallel_map``.
        """
        return self._map

    @map.setter
    def map(self, value: str) -> None:
        if value not in _MAPS:
            raise ValueError(f"map must be one of {_MAPS}, got {value!r}")
        self._map = value

    @property
    def num_cpus(self) -> int:
        """
        Number of worker processes used when ``map`` is 'parallel'.
        Defaults to the number of cpus available to this process.
        """
        if self._num_cpus == 0:
            self._num_cpus = available_cpu_count()
        return self._num_cpus

    @num_cpus.setter
    def num_cpus(self, value: int) -> None:
        value = int(value)
        if value < 1:
            raise ValueError(f"num_cpus must be positive, got {value}")
        self._num_cpus = value

    @property
    def progress_bar(self) -> str:
        """
        Progress bar passed to the QuTiP solvers and maps.  Empty string
        disables it.
        """
        return self._progress_bar

    @progress_bar.setter
    def progress_bar(self, value: str) -> None:
        value = value or ""
        if value not in _PROGRESS_BARS:
            raise ValueError(
                f"progress_bar must be one of {_PROGRESS_BARS}, got {value!r}"
            )
        self._progress_bar = value

    def __str__(self) -> str:
        lines = ["openqs settings:"]
        for attr in self.__dir__():
            if not attr.startswith('_'):
                value = self.__getattribute__(attr)
                if not callable(value):
                    lines.append(f"    {attr}: {value}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return self.__str__()


settings = Settings()
