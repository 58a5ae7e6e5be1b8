"""
Validate a configuration file and report any issues.

Usage:
    python scripts/validate_config.py configs/default_config.yaml
"""

import sys
from pathlib import Path

# Add src to path so we can import asciigrav without installing it
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from asciigrav.config import SimulationParameters


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/validate_config.py <config_file.yaml>")
        sys.exit(1)

    config_path = sys.argv[1]

    print(f"Validating configuration: {config_path}")
    print("=" * 70)

    try:
        params = SimulationParameters.from_yaml(config_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    print("[OK] Configuration loaded successfully")
    print()

    messages = params.validate()
    errors = [m for m in messages if m.startswith("ERROR")]
    warns = [m for m in messages if m.startswith("WARNING")]

    if errors:
        print(f"[ERROR] {len(errors)} ERROR(S) found:")
        for error in errors:
            print(f"  {error}")
        print()

    if warns:
        print(f"[WARN] {len(warns)} WARNING(S):")
        for warn in warns:
            print(f"  {warn}")
        print()

    print("Configuration summary:")
    print(params)

    if errors:
        print()
        print("Configuration has ERRORS and should not be used for simulation.")
        sys.exit(1)


if __name__ == "__main__":
    main()
