"""Test package for :mod:`optsim`."""
