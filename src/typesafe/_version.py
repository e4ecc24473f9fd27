"""Version information for typesafe.

setuptools reads ``version`` from here at build time (see ``pyproject.toml``),
so this is the single place the version is declared.
"""

version = "0.1.0"
version_tuple = (0, 1, 0)
