# This file is automatically generated by openqs's setup.py.
short_version = '0.3.0'
version = '0.3.0'
release = True
