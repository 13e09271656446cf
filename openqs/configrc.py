"""
Reading and writing of the openqsrc configuration file.

The file is an ini file with a single ``[openqs]`` section whose keys are the
names of the :obj:`openqs.settings.settings` properties, for example::

    [openqs]
    debug = True
    map = parallel
    num_cpus = 4
"""
import os
import warnings
from configparser import ConfigParser, Error as ConfigParserError

__all__ = ['generate_openqsrc', 'has_openqs_rc', 'has_rc_key',
           'read_rc_key', 'write_rc_key', 'load_rc_config', 'save_rc_config']

SECTION = "openqs"
RC_KEYS = {
    "debug": bool,
    "log_handler": str,
    "colorblind_safe": bool,
    "map": str,
    "num_cpus": int,
    "progress_bar": str,
}


def _get_reader(datatype):
    if datatype is bool:
        def read_bool(bool_str):
            lowered = bool_str.strip().lower()
            if lowered in ("true", "1", "yes", "on"):
                return True
            if lowered in ("false", "0", "no", "off"):
                return False
            raise ValueError(f"cannot interpret {bool_str!r} as a boolean")
        return read_bool
    return datatype


def _full_path(rc_file):
    rc_file = os.path.expanduser(rc_file)
    if os.path.isabs(rc_file):
        return rc_file
    openqs_conf_dir = os.path.join(os.path.expanduser("~"), '.openqs')
    return os.path.join(openqs_conf_dir, rc_file)


def _read_config(rc_file):
    config = ConfigParser()
    try:
        config.read(_full_path(rc_file), encoding="utf-8")
    except (ConfigParserError, UnicodeDecodeError, OSError) as err:
        warnings.warn(f"ignoring malformed openqsrc file {rc_file}: {err}")
        return ConfigParser()
    return config


def has_openqs_rc(rc_file="openqsrc"):
    """
    Checks to see if the openqsrc file exists, by default in
    HOME/.openqs/openqsrc
    """
    return os.path.isfile(_full_path(rc_file))


def generate_openqsrc(rc_file="openqsrc"):
    """
    Generate a blank openqsrc file.  A valid existing file is left untouched.
    """
    openqs_rc_file = _full_path(rc_file)
    os.makedirs(os.path.dirname(openqs_rc_file), exist_ok=True)

    if os.path.isfile(openqs_rc_file):
        try:
            config = ConfigParser()
            config.read(openqs_rc_file, encoding="utf-8")
        except (ConfigParserError, UnicodeDecodeError, OSError):
            # Not a valid file, overwrite
            pass
        else:
            if SECTION in config:
                return

    with open(openqs_rc_file, 'w', encoding='utf-8') as cfgfile:
        config = ConfigParser()
        config[SECTION] = {}
        config.write(cfgfile)


def has_rc_key(key, rc_file="openqsrc"):
    """
    Verify if key exist in the openqs section of rc_file
    """
    config = _read_config(rc_file)
    return SECTION in config and key in config[SECTION]


def write_rc_key(key, value, rc_file="openqsrc"):
    """
    Writes a single key value to the openqsrc file

    Parameters
    ----------
    key : str
        The key name to be written.
    value : int/bool/str
        Value corresponding to given key.
    rc_file : str
        String specifying file location.
    """
    if key not in RC_KEYS:
        raise ValueError(
            f"unknown openqsrc key {key!r}, expected one of {sorted(RC_KEYS)}"
        )
    generate_openqsrc(rc_file)
    config = _read_config(rc_file)
    config[SECTION][key] = str(value)

    with open(_full_path(rc_file), 'w', encoding='utf-8') as cfgfile:
        config.write(cfgfile)


def read_rc_key(key, rc_file="openqsrc"):
    """
    Reads a single key from the openqsrc file and converts it to the type of
    the matching setting.

    Parameters
    ----------
    key : str
        The key name to be read.
    rc_file : str
        String specifying file location.
    """
    if key not in RC_KEYS:
        raise ValueError(
            f"unknown openqsrc key {key!r}, expected one of {sorted(RC_KEYS)}"
        )
    config = _read_config(rc_file)
    reader = _get_reader(RC_KEYS[key])
    return reader(config[SECTION][key])


def load_rc_config(settings, rc_file="openqsrc"):
    """
    Overwrite the values of ``settings`` with the ones found in the rc file.
    Unknown keys are reported with a warning and skipped.
    """
    config = _read_config(rc_file)
    if SECTION not in config:
        return
    for key, raw in config[SECTION].items():
        if key not in RC_KEYS:
            warnings.warn(f"unknown key {key!r} in openqsrc, ignored")
            continue
        setattr(settings, key, _get_reader(RC_KEYS[key])(raw))


def save_rc_config(settings, rc_file="openqsrc"):
    """
    Write all the values of ``settings`` stored in rc files.
    """
    generate_openqsrc(rc_file)
    config = _read_config(rc_file)
    for key in RC_KEYS:
        config[SECTION][key] = str(getattr(settings, key))
    with open(_full_path(rc_file), 'w', encoding='utf-8') as cfgfile:
        config.write(cfgfile)
