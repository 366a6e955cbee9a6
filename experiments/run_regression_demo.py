#!/usr/bin/env python3
"""Linear regression demo on synthetic linear data.

Usage:
    python experiments/run_regression_demo.py
    python experiments/run_regression_demo.py --features 6 --noise 0.1 --plot
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging
import time
from datetime import datetime

import numpy as np

from minilearn.config import LinearRegressionConfig, MiniLearnConfig
from minilearn.data.synthetic import generate_linear_data
from minilearn.visualization.plot_utils import plot_training_curve, save_results_json


def run_regression_demo(
    config: LinearRegressionConfig,
    n_samples: int = 100,
    noise_std: float = 0.0,
    seed: int = 42,
    output_dir: Path = None,
    plot: bool = False,
) -> dict:
    """Train linear regression on generated data and save metrics.

    Returns:
        Dict with all metrics.
    """
    print("=" * 60)
    print(f"Linear regression demo: d={config.n_features}, lr={config.learning_rate}, "
          f"iterations={config.n_iterations}")
    print("=" * 60)

    dataset = generate_linear_data(
        n_samples=n_samples,
        n_features=config.n_features,
        noise_std=noise_std,
        seed=seed,
    )

    start = time.time()
    with config.build_model() as model:
        history = model.train(
            dataset.samples, dataset.targets, config.learning_rate, config.n_iterations
        )
        weights = model.weights
    elapsed = time.time() - start

    metrics = {
        "n_features": config.n_features,
        "n_samples": dataset.n_samples,
        "learning_rate": config.learning_rate,
        "n_iterations": config.n_iterations,
        "noise_std": noise_std,
        "final_mse": history[-1] if history else None,
        "weight_error": float(np.linalg.norm(weights - dataset.weights)),
        "weights": weights,
        "true_weights": dataset.weights,
        "runtime_seconds": elapsed,
        "timestamp": datetime.now().isoformat(),
    }

    print(f"\n--- Results Summary ---")
    if history:
        print(f"  Final MSE:     {history[-1]:.6g}")
    print(f"  Weight error:  {metrics['weight_error']:.6g}")
    print(f"  Runtime:       {elapsed:.3f}s")

    if output_dir is None:
        output_dir = Path("outputs") / "regression"
    output_dir.mkdir(parents=True, exist_ok=True)

    save_results_json(metrics, output_dir / "metrics.json")
    save_results_json(MiniLearnConfig(regression=config).to_dict(), output_dir / "config.json")

    if plot and history:
        plot_training_curve(history, out_path=output_dir / "training_curve.png")

    print(f"\n  Saved to: {output_dir}")
    return metrics


def main():
    parser = argparse.ArgumentParser(description="Linear regression demo")
    parser.add_argument("--features", type=int, default=4, help="Number of variables")
    parser.add_argument("--samples", type=int, default=100, help="Number of samples")
    parser.add_argument("--learning-rate", type=float, default=0.01, help="SGD step size")
    parser.add_argument("--iterations", type=int, default=1000, help="Passes over the data")
    parser.add_argument("--noise", type=float, default=0.0, help="Target noise std")
    parser.add_argument("--seed", type=int, default=42, help="Data seed")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Override output directory")
    parser.add_argument("--plot", action="store_true", help="Save the MSE curve")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = LinearRegressionConfig(
        n_features=args.features,
        learning_rate=args.learning_rate,
        n_iterations=args.iterations,
    )
    run_regression_demo(
        config,
        n_samples=args.samples,
        noise_std=args.noise,
        seed=args.seed,
        output_dir=Path(args.output_dir) if args.output_dir else None,
        plot=args.plot,
    )


if __name__ == "__main__":
    main()
