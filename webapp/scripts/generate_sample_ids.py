import sys
import random
from pathlib import Path

# Add webapp to path
current_dir = Path(__file__).parent.parent
sys.path.append(str(current_dir))

from inputcheck.common.utils import format_national_id
from inputcheck.common.validators import generate_valid_eid


def generate(count=10, seed=None):
    """Return ``count`` random valid Emirates IDs (checksum included)."""
    rng = random.Random(seed)
    ids = []
    for _ in range(count):
        year = rng.randint(1940, 2024)
        sequence = rng.randint(0, 9999999)
        ids.append(generate_valid_eid(year, sequence))
    return ids


if __name__ == '__main__':
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 10
    print(f"Generating {count} Emirates IDs...")
    for eid in generate(count):
        print(f"{eid}  {format_national_id(eid)}")
    print("Done.")
