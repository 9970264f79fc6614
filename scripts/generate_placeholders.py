#!/usr/bin/env python3
"""Generate placeholder sprite sheets for PowerKids."""

from pathlib import Path
import sys

# Add src to path for running directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from powerkids.assets.placeholder_generator import generate_placeholders
from powerkids.config import GameConfig


def main():
    """Generate the character and tile sheets if they are missing."""
    root = Path(__file__).parent.parent
    overwrite = "--overwrite" in sys.argv[1:]
    print(f"Generating placeholder sheets under {root / 'static'}")

    generated = generate_placeholders(GameConfig(asset_root=root), overwrite=overwrite)

    if generated:
        print(f"Generated {len(generated)} sheets:")
        for kind, path in generated.items():
            print(f"  - {kind}: {path}")
    else:
        print("No sheets generated (all sheets already exist, use --overwrite)")


if __name__ == "__main__":
    main()
