import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import tempfile
import unittest
from unittest import mock
from gltf_validation import config
from gltf_validation.config import ValidatorConfig, default_executable_path


class TestDefaultExecutablePath(unittest.TestCase):
    def test_linux_x64(self):
        with mock.patch("platform.machine", return_value="x86_64"), \
                mock.patch.object(sys, "platform", "linux"):
            path = default_executable_path()
        self.assertEqual(path, os.path.join(config.PACKAGE_DIR, "gltf_validator"))

    def test_windows_x64(self):
        with mock.patch("platform.machine", return_value="AMD64"), \
                mock.patch.object(sys, "platform", "win32"):
            path = default_executable_path()
        self.assertEqual(path, os.path.join(config.PACKAGE_DIR, "gltf_validator.exe"))

    def test_other_architecture(self):
        with mock.patch("platform.machine", return_value="arm64"), \
                mock.patch.object(sys, "platform", "linux"):
            self.assertIsNone(default_executable_path())

    def test_other_platform(self):
        with mock.patch("platform.machine", return_value="x86_64"), \
                mock.patch.object(sys, "platform", "darwin"):
            self.assertIsNone(default_executable_path())


class TestValidatorConfig(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.env_path = os.path.join(self.tmp_dir.name, ".env")

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write_env(self, text):
        with open(self.env_path, "w") as f:
            f.write(text)

    def test_defaults(self):
        cfg = ValidatorConfig()
        self.assertIsNone(cfg.executable_path)
        self.assertEqual(cfg.timeout, 10.0)

    def test_from_env_file(self):
        self.write_env("GLTF_VALIDATOR_PATH=/opt/khronos/gltf_validator\nGLTF_VALIDATOR_TIMEOUT=2.5\n")
        with mock.patch.dict(os.environ, {}, clear=True):
            cfg = ValidatorConfig.from_environment(self.env_path)
        self.assertEqual(cfg.executable_path, "/opt/khronos/gltf_validator")
        self.assertEqual(cfg.timeout, 2.5)

    def test_environment_wins_over_env_file(self):
        self.write_env("GLTF_VALIDATOR_PATH=/from/dotenv\n")
        with mock.patch.dict(os.environ, {"GLTF_VALIDATOR_PATH": "/from/environ"}, clear=True):
            cfg = ValidatorConfig.from_environment(self.env_path)
        self.assertEqual(cfg.executable_path, "/from/environ")

    def test_falls_back_to_detected_path(self):
        self.write_env("")
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(config, "default_executable_path", return_value="/bundled/gltf_validator"):
            cfg = ValidatorConfig.from_environment(self.env_path)
        self.assertEqual(cfg.executable_path, "/bundled/gltf_validator")
        self.assertEqual(cfg.timeout, 10.0)

    def test_bad_timeout(self):
        self.write_env("GLTF_VALIDATOR_TIMEOUT=soon\n")
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError):
                ValidatorConfig.from_environment(self.env_path)

    def test_timeout_must_be_finite_and_positive(self):
        for raw in ("inf", "nan", "0", "-1"):
            with self.subTest(timeout=raw):
                self.write_env(f"GLTF_VALIDATOR_TIMEOUT={raw}\n")
                with mock.patch.dict(os.environ, {}, clear=True):
                    with self.assertRaises(ValueError):
                        ValidatorConfig.from_environment(self.env_path)

    def test_constructor_rejects_bad_timeout(self):
        for timeout in (float("inf"), 0, -1):
            with self.subTest(timeout=timeout):
                with self.assertRaises(ValueError):
                    ValidatorConfig(executable_path="/opt/gltf_validator", timeout=timeout)


class TestDefaultConfig(unittest.TestCase):
    def tearDown(self):
        config.set_default_config(None)

    def test_override(self):
        custom = ValidatorConfig(executable_path="/custom/gltf_validator", timeout=3)
        config.set_default_config(custom)
        self.assertIs(config.get_default_config(), custom)

    def test_resolved_once(self):
        config.set_default_config(None)
        first = config.get_default_config()
        self.assertIs(config.get_default_config(), first)


if __name__ == "__main__":
    unittest.main(verbosity=2)
