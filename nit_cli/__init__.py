"""nit - a Nix flake template launcher.

The resolution engine lives in :mod:`nit_cli.sources`; everything else is
the command-line application around it.
"""
