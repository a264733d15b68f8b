"""Reset the database and seed campus resources plus a demo student.

Usage:
    python setup_mock_data.py            # asks before wiping
    python setup_mock_data.py --yes      # no prompt (CI, containers)
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
ROOT_DIR = Path(__file__).parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from database import get_db_path, mock_data, store


def print_summary(summary: dict) -> None:
    """Show what was seeded and how to chat as the demo student."""
    user = store.get_user(summary["user_id"])
    profile = user["profile"]
    print()
    print(f"Database:         {get_db_path()}")
    print(f"Campus resources: {summary['resources']}")
    print(f"Demo student:     {user['name']} <{user['email']}> (id={user['id']})")
    print(f"  Major/year:     {profile['major']}, {profile['year']}")
    print(f"  Stress level:   {profile['stress_level']}/10")
    print()
    print(f"CLI:  python main.py --user-id {user['id']}")
    print(f"API:  send the header 'X-User-Id: {user['id']}'")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the campus advisor database")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args(argv)

    if not args.yes:
        print("This will clear existing data and populate with mock data.")
        response = input("Continue? (y/n): ")
        if response.lower() != "y":
            print("Cancelled.")
            return 1

    mock_data.clear_all_data()
    summary = mock_data.populate_mock_data()
    print_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
