"""
Install steps for the bootstrap.

Each step lives in its own subpackage and provides the check-before-act
behaviour for one part of the environment.
"""
