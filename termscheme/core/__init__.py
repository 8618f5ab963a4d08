"""termscheme.core: Foundation layer.

Contains the value types, the default palette, the ColorScheme model,
environment configuration, and the report builder.
This module has NO import-time dependencies on termscheme.formats or
termscheme.registry; ColorScheme.read()/write() import the .colorscheme
format lazily. Only stdlib, numpy, and PIL are allowed here.
"""
