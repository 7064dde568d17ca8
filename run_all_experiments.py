"""
Master script to run all experiments in sequence.

This script orchestrates the experimental pipeline:
1. Synthetic burst-detection grid (MIDAS and MIDAS-R)
2. Scoring a CSV edge stream, when one is supplied
3. Results visualization

Usage:
    python run_all_experiments.py [--quick] [--events in.csv]
"""

import sys
import os
import argparse
from pathlib import Path


def run_synthetic(num_ticks=200, rows_grid=None, buckets_grid=None, device='cpu'):
    """Run synthetic burst experiments."""
    print("\n" + "="*60)
    print("STEP 1: SYNTHETIC BURST EXPERIMENTS")
    print("="*60)

    from experiments.synthetic_bursts import run_experiment_grid

    try:
        run_experiment_grid(
            output_dir='results/synthetic',
            num_ticks=num_ticks,
            rows_grid=rows_grid,
            buckets_grid=buckets_grid,
            device=device,
        )
        print("\n✓ Synthetic experiments completed")
        return True
    except Exception as e:
        print(f"\n✗ Synthetic experiments failed: {e}")
        return False


def run_event_scoring(events_path):
    """Score a CSV edge stream with both detectors."""
    print("\n" + "="*60)
    print("STEP 2: CSV STREAM SCORING")
    print("="*60)

    from experiments.score_events import read_events, score_events

    try:
        df = read_events(Path(events_path))
        out_dir = Path('results/scores')
        out_dir.mkdir(parents=True, exist_ok=True)
        for detector in ('midas', 'midas_r'):
            scores = score_events(df, detector=detector)
            out = out_dir / f'{detector}.csv'
            out.write_text('\n'.join(f"{s:.6f}" for s in scores) + '\n')
            print(f"  Wrote {out}")
        print("\n✓ Stream scoring completed")
        return True
    except Exception as e:
        print(f"\n✗ Stream scoring failed: {e}")
        return False


def run_plots():
    """Plot AUC against sketch width."""
    print("\n" + "="*60)
    print("STEP 3: FIGURES")
    print("="*60)

    from scripts.generate_main_plot import plot_summary

    try:
        out = plot_summary(
            Path('results/synthetic/experiment_summary.json'),
            Path('results/figures/auc_vs_buckets.png'),
        )
        print(f"\n✓ Figure written to {out}")
        return True
    except Exception as e:
        print(f"\n✗ Plotting failed: {e}")
        return False


def main():
    """Run complete experimental pipeline."""
    parser = argparse.ArgumentParser(
        description='Run all streaming anomaly detection experiments'
    )
    parser.add_argument(
        '--device',
        type=str,
        default='cpu',
        choices=['cuda', 'cpu'],
        help='Device holding the sketch counters'
    )
    parser.add_argument(
        '--quick',
        action='store_true',
        help='Run quick mode with a shorter stream and smaller grid'
    )
    parser.add_argument(
        '--events',
        type=str,
        default=None,
        help='Optional CSV of source,dest,time rows to score'
    )
    parser.add_argument(
        '--skip-synthetic',
        action='store_true',
        help='Skip synthetic experiments'
    )
    parser.add_argument(
        '--skip-plots',
        action='store_true',
        help='Skip figure generation'
    )

    args = parser.parse_args()

    if args.quick:
        num_ticks = 50
        rows_grid = [2]
        buckets_grid = [97, 769]
        print("\n*** QUICK MODE: Running with a reduced grid ***\n")
    else:
        num_ticks = 200
        rows_grid = None
        buckets_grid = None

    Path('results').mkdir(exist_ok=True)

    print("="*60)
    print("MIDAS STREAMING ANOMALY DETECTION - EXPERIMENTAL PIPELINE")
    print("="*60)
    print(f"Device: {args.device}")
    print(f"Mode: {'Quick' if args.quick else 'Full'}")

    results = {
        'synthetic': False,
        'scoring': False,
        'plots': False
    }

    if not args.skip_synthetic:
        results['synthetic'] = run_synthetic(
            num_ticks=num_ticks,
            rows_grid=rows_grid,
            buckets_grid=buckets_grid,
            device=args.device
        )
    else:
        print("\nSkipping synthetic experiments")

    if args.events:
        results['scoring'] = run_event_scoring(args.events)
    else:
        print("\nNo --events given, skipping stream scoring")

    if not args.skip_plots and results['synthetic']:
        results['plots'] = run_plots()
    else:
        print("\nSkipping figures")

    print("\n" + "="*60)
    print("EXPERIMENTAL PIPELINE COMPLETE")
    print("="*60)

    for experiment, success in results.items():
        status = "✓ SUCCESS" if success else "✗ FAILED/SKIPPED"
        print(f"{experiment.upper()}: {status}")

    print("\nResults are saved in the 'results/' directory")
    print("="*60)

    return any(results.values())


if __name__ == '__main__':
    success = main()
    sys.exit(0 if success else 1)
