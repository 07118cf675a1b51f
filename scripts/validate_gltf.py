#!/usr/bin/env python3
"""
glTF Validation Runner — prints a Khronos glTF Validator report for CI.

Usage:
    python3 validate_gltf.py <gltf_path> [--validator PATH] [--timeout SECONDS] [--json]

Exit codes:
    0 = No errors reported
    1 = The validator reported one or more errors
    2 = Validator unavailable, or the report is not authoritative
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gltf_validation import ValidatorConfig, ValidatorLauncher


def build_config(args):
    config = ValidatorConfig.from_environment()
    if args.validator:
        config = ValidatorConfig(executable_path=args.validator, timeout=config.timeout)
    if args.timeout is not None:
        config = ValidatorConfig(executable_path=config.executable_path, timeout=args.timeout)
    return config


def print_report(report):
    print("\n" + "=" * 60)
    print(f"  VALIDATION REPORT — {os.path.basename(report.uri) or report.uri}")
    print(f"  Validator {report.validator_version} at {report.validated_at}")
    print("=" * 60 + "\n")

    for m in report.messages:
        location = f" {m.pointer}" if m.pointer else ""
        print(f"  [{m.level.name}] {m.code}{location}: {m.message}")

    issues = report.issues
    if issues is not None:
        print(f"\n  Errors: {issues.num_errors}  Warnings: {issues.num_warnings}  "
              f"Infos: {issues.num_infos}  Hints: {issues.num_hints}")
        if issues.truncated:
            print("  (message list truncated by the validator)")

    print(f"\n{'=' * 60}")
    if report.has_errors:
        print("  RESULT: FAILED")
    else:
        print("  RESULT: PASSED")
    print("=" * 60 + "\n")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate a glTF/GLB file with the Khronos glTF Validator.")
    parser.add_argument("gltf_path", help="Path to the .gltf or .glb file")
    parser.add_argument("--validator", help="Path to the gltf_validator executable")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for the validator")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"❌ FATAL: {e}")
        return 2

    launcher = ValidatorLauncher(config)
    try:
        report = launcher.validate_file(args.gltf_path)
    except FileNotFoundError as e:
        print(f"❌ FATAL: glTF Validator executable not found: {e}")
        return 2

    if report is None:
        print(f"⚠️  {args.gltf_path} could not be validated.")
        return 2

    if args.json:
        print(report.to_json())
    else:
        print_report(report)

    return 1 if report.has_errors else 0


if __name__ == "__main__":
    sys.exit(main())
