import unittest

from handtree.config import CONFIG, validate_config

class TestConfig(unittest.TestCase):
    def test_defaults_are_valid(self):
        self.assertIs(validate_config(CONFIG), CONFIG)

    def test_rejects_bad_values(self):
        cases = {
            "CONFIRM_WINDOW": 0,
            "INERTIA_DECAY": 1.0,
            "INERTIA_EPSILON": 0.0,
            "T_CURLED": 2.0,  # above T_EXTENDED
            "DETECTION_INTERVAL": -0.01,
            "ZOOM_INITIAL": 1.5,
        }
        for key, value in cases.items():
            cfg = dict(CONFIG, **{key: value})
            with self.assertRaisesRegex(ValueError, key):
                validate_config(cfg)

if __name__ == '__main__':
    unittest.main()
