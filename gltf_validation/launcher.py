import os
import subprocess
import sys
from typing import Optional

from gltf_validation.config import ValidatorConfig, get_default_config
from gltf_validation.models import UNSUPPORTED_EXTENSION, ValidationReport


class ValidatorLauncher:
    """Runs the Khronos glTF Validator command line tool and parses its report."""

    ARGUMENTS = ["-p", "-r", "-a", "--stdout"]

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or get_default_config()

    @property
    def executable_path(self):
        return self.config.executable_path

    def build_command(self, gltf_path):
        return [self.executable_path, *self.ARGUMENTS, gltf_path]

    def validate_file(self, gltf_path) -> Optional[ValidationReport]:
        """
        Validates a glTF/GLB file.

        Returns None when the validator is unavailable, times out, prints
        nothing, or hits an extension it does not support. Raises
        FileNotFoundError if the configured executable is missing and
        ReportFormatError if its output cannot be parsed.
        """
        if not self.executable_path or not self.executable_path.strip():
            return None

        if not os.path.isfile(self.executable_path):
            raise FileNotFoundError(self.executable_path)

        # The validator resolves side resources relative to the input path.
        gltf_path = os.path.abspath(gltf_path)

        cmd = self.build_command(gltf_path)
        print(f"Executing glTF Validator command: {' '.join(cmd)}", file=sys.stderr)

        stdout = self._run(cmd)
        if stdout is None:
            return None

        if not stdout.strip():
            print(f"DEBUG: glTF Validator produced no output for {gltf_path}", file=sys.stderr)
            return None

        report = ValidationReport.parse(stdout)

        if report.has_code(UNSUPPORTED_EXTENSION):
            print(f"DEBUG: Skipping report for {gltf_path}, validator does not support one of its extensions.", file=sys.stderr)
            return None

        return report

    def _run(self, cmd):
        """Returns the captured stdout, or None if the process had to be killed."""
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding='utf-8',
            errors='replace'
        )

        try:
            # communicate() drains both pipes while it waits, so the child never blocks on a full pipe.
            stdout, stderr = process.communicate(timeout=self.config.timeout)
        except subprocess.TimeoutExpired:
            print(f"DEBUG: glTF Validator did not exit within {self.config.timeout}s, killing it.", file=sys.stderr)
            try:
                process.kill()
            except OSError as e:
                print(f"DEBUG: Failed to kill glTF Validator: {e}", file=sys.stderr)
                # The unreaped handle is left to Popen's finalizer.
                return None
            process.wait()
            return None
        finally:
            for stream in (process.stdout, process.stderr):
                if stream:
                    stream.close()

        if stderr and stderr.strip():
            print(f"DEBUG: glTF Validator stderr: {stderr.strip()}", file=sys.stderr)

        return stdout


def validate_file(gltf_path, config: Optional[ValidatorConfig] = None) -> Optional[ValidationReport]:
    return ValidatorLauncher(config).validate_file(gltf_path)
