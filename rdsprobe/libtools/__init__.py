# Import files explicitly, e.g. `from rdsprobe.libtools import network`.
