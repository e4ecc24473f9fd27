import unittest

import typesafe
from typesafe import _version


class TestVersion(unittest.TestCase):
    def test_version(self):
        self.assertEqual(_version.version, typesafe.__version__)
        self.assertEqual(_version.version_tuple, typesafe.__version_tuple__)
        self.assertEqual(
            typesafe.__version__,
            ".".join(str(part) for part in typesafe.__version_tuple__),
        )
        self.assertNotIn("dev", typesafe.__version__)
