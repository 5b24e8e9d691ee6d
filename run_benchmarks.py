#!/usr/bin/env python3
"""
Benchmark runner script for B+ trees.

Thin wrapper around ``asv`` selecting insert, search or delete benchmarks.
"""

import argparse
import subprocess
import sys
from pathlib import Path


def run_command(cmd, description=""):
    """Run a command and handle errors."""
    print(f"\n🚀 {description}")
    print(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        if result.stdout:
            print(result.stdout)
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ Error: {e}")
        if e.stderr:
            print(f"stderr: {e.stderr}")
        return False


def main():
    parser = argparse.ArgumentParser(
        description="Run benchmarks for B+ trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_benchmarks.py --setup        # Initial setup
  python run_benchmarks.py --quick        # Quick development test
  python run_benchmarks.py --insert       # Insert benchmarks only
  python run_benchmarks.py --search       # Search benchmarks only
  python run_benchmarks.py --report       # Generate HTML report
        """
    )

    parser.add_argument('--setup', action='store_true',
                        help='Initialize ASV environment (run once)')
    parser.add_argument('--quick', action='store_true',
                        help='Run quick development benchmarks')

    parser.add_argument('--insert', action='store_true',
                        help='Run insert benchmarks only')
    parser.add_argument('--search', action='store_true',
                        help='Run search benchmarks only')
    parser.add_argument('--delete', action='store_true',
                        help='Run delete benchmarks only')

    parser.add_argument('--report', action='store_true',
                        help='Generate HTML report from existing results')
    parser.add_argument('--show', action='store_true',
                        help='Show latest results in terminal')
    parser.add_argument('--machine', type=str,
                        help='Specify machine name for results')

    args = parser.parse_args()

    if not Path('asv.conf.json').exists():
        print("❌ Error: asv.conf.json not found. Please run from project root.")
        return 1

    if args.setup:
        if not run_command(['poetry', 'run', 'asv', 'machine', '--yes'],
                           "Configuring ASV machine info"):
            return 1
        print("✅ ASV setup complete!")
        return 0

    if args.report:
        if run_command(['poetry', 'run', 'asv', 'publish'], "Publishing results"):
            run_command(['poetry', 'run', 'asv', 'preview'], "Opening report in browser")
        return 0

    if args.show:
        run_command(['poetry', 'run', 'asv', 'show'], "Showing latest results")
        return 0

    cmd = ['poetry', 'run', 'asv', 'run']
    if args.machine:
        cmd.extend(['--machine', args.machine])

    if args.quick:
        cmd.append('--quick')

    filters = []
    if args.insert:
        filters.append('time_insert')
    if args.search:
        filters.append('time_search')
    if args.delete:
        filters.append('time_delete')
    for f in filters:
        cmd.extend(['-b', f])

    description = f"Targeted benchmarks: {', '.join(filters)}" if filters else "All benchmarks"
    if not run_command(cmd, description):
        print("\n❌ Benchmarks failed!")
        return 1

    print("\n✅ Benchmarks completed successfully!")
    print("  • View results: python run_benchmarks.py --show")
    print("  • Generate report: python run_benchmarks.py --report")
    return 0


if __name__ == '__main__':
    sys.exit(main())
