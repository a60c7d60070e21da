#!/usr/bin/env python3
"""
Master Pipeline Orchestration Script

Runs the complete pipeline:
1. Verify data sources
2. Build report tables (silver + gold layers)
3. Generate the report (figures, maps, markdown)

Usage:
    # Full pipeline
    python scripts/run_pipeline.py

    # Tables only
    python scripts/run_pipeline.py --tables-only
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime
import subprocess

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT))

from config.paths import ensure_directories


def print_header(text):
    """Print a formatted header"""
    print('\n' + '=' * 80)
    print(text.center(80))
    print('=' * 80 + '\n')


def run_command(cmd, description):
    """Run a command and handle errors"""
    print(f'\n>>> {description}')
    print(f'Command: {" ".join(cmd)}')
    print()

    try:
        subprocess.run(cmd, check=True, cwd=PROJECT_ROOT)
        print(f'\n✓ {description} completed successfully')
        return True
    except subprocess.CalledProcessError as e:
        print(f'\n✗ {description} failed with exit code {e.returncode}')
        return False
    except OSError as e:
        print(f'\n✗ {description} failed: {e}')
        return False


def verify_data():
    """Run data verification"""
    print_header('STEP 0: DATA VERIFICATION')
    cmd = [sys.executable, 'scripts/verify_data.py']
    return run_command(cmd, 'Data verification')


def build_tables():
    """Build the unified table and the gold report tables"""
    print_header('STEP 1: BUILD REPORT TABLES')
    cmd = [sys.executable, 'data_engineering/datasets/build_report_tables.py']
    return run_command(cmd, 'Report tables builder')


def build_report(price_threshold=None):
    """Render figures, maps and the markdown report"""
    print_header('STEP 2: GENERATE REPORT')
    cmd = [sys.executable, 'analysis/reports/covid_listings_report.py']
    if price_threshold is not None:
        cmd.extend(['--price-threshold', str(price_threshold)])
    return run_command(cmd, 'Report generation')


def main():
    """Main pipeline orchestration"""
    parser = argparse.ArgumentParser(
        description='Run the complete listings pipeline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full pipeline
  python scripts/run_pipeline.py

  # Build tables, skip the report
  python scripts/run_pipeline.py --tables-only

  # Use a different outlier ceiling for the capped price views
  python scripts/run_pipeline.py --price-threshold 800
        """
    )

    parser.add_argument(
        '--tables-only',
        action='store_true',
        help='Build the report tables only (skip figures and maps)'
    )

    parser.add_argument(
        '--price-threshold',
        type=float,
        help='Price ceiling for the capped report views'
    )

    args = parser.parse_args()

    print_header('VENICE LISTINGS - PIPELINE')
    print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')

    print('\nEnsuring directory structure...')
    ensure_directories()
    print('✓ Directory structure ready\n')

    start_time = datetime.now()

    # Nothing downstream is meaningful without valid inputs
    if not verify_data():
        print('\n✗ Data verification failed. Pipeline aborted.')
        return 1

    if not build_tables():
        print('\n✗ Report tables failed. Pipeline aborted.')
        return 1

    all_success = True
    if not args.tables_only:
        all_success = build_report(args.price_threshold)

    end_time = datetime.now()

    print_header('PIPELINE SUMMARY')
    print(f'Started:  {start_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Finished: {end_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Duration: {end_time - start_time}')
    print()

    if all_success:
        print('✓ PIPELINE COMPLETED SUCCESSFULLY')
        return 0
    else:
        print('✗ PIPELINE COMPLETED WITH ERRORS')
        return 1


if __name__ == '__main__':
    sys.exit(main())
