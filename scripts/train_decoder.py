"""
Fit a linear probabilistic decoder with the reconstruction loss.

Synthetic latent codes Z are mapped to binary observations X through a
random ground-truth decoder. A linear decoder (logits = Z W + b) is then
trained by plain gradient descent, with the gradient of the loss w.r.t. the
logits supplied by ReconstructionLoss.backward.

Usage:
    python scripts/train_decoder.py --epochs 200
    python scripts/train_decoder.py --config configs/decoder.yaml --plot
"""

import os
import argparse
import numpy as np
from tqdm import tqdm

from reconloss import ReconstructionLoss
from reconloss.utils.config import get_default_config, load_config, save_config


# ============================================================================
# Configuration
# ============================================================================

RESULTS_DIR = "./results"


# ============================================================================
# Data
# ============================================================================

def make_dataset(num_samples: int, latent_dim: int, output_dim: int,
                 distribution: str, rng: np.random.Generator):
    """
    Sample latent codes and observations from a random linear decoder.

    Returns:
        Tuple (Z, X) of shapes (N, latent_dim) and (N, output_dim).
    """
    W_true = rng.normal(0.0, 1.5, size=(latent_dim, output_dim))
    b_true = rng.normal(0.0, 0.5, size=output_dim)
    Z = rng.normal(size=(num_samples, latent_dim))
    logits = Z @ W_true + b_true
    if distribution == "bernoulli":
        X = (rng.random(logits.shape) < 1.0 / (1.0 + np.exp(-logits))).astype(np.float64)
    else:
        X = logits + rng.normal(size=logits.shape)
    return Z, X


# ============================================================================
# Training
# ============================================================================

def train(args):
    config = get_default_config()
    if args.config is not None:
        config = load_config(args.config, defaults=config)
    train_cfg = config["training"]
    if args.epochs is not None:
        train_cfg["epochs"] = args.epochs
    if args.lr is not None:
        train_cfg["learning_rate"] = args.lr

    print("=" * 70)
    print("Training linear decoder with reconstruction loss")
    print("=" * 70)

    loss_fn = ReconstructionLoss.from_config(config["loss"])
    print(f"\nLoss: {loss_fn}")

    rng = np.random.default_rng(train_cfg["seed"])
    Z, X = make_dataset(train_cfg["num_samples"], train_cfg["latent_dim"],
                        train_cfg["output_dim"], config["loss"]["distribution"], rng)
    print(f"  Samples: {Z.shape[0]}, latent dim: {Z.shape[1]}, output dim: {X.shape[1]}")

    W = np.zeros((train_cfg["latent_dim"], train_cfg["output_dim"]))
    b = np.zeros(train_cfg["output_dim"])
    lr = train_cfg["learning_rate"]
    # Step size per sample regardless of reduction
    scale = 1.0 / X.shape[0] if loss_fn.reduction else X.shape[1]

    history = {"loss": []}
    pbar = tqdm(range(train_cfg["epochs"]), desc="Training")
    for epoch in pbar:
        logits = Z @ W + b
        loss = loss_fn.forward(logits, X)
        grad = loss_fn.backward(logits, X)

        W -= lr * scale * (Z.T @ grad)
        b -= lr * scale * grad.sum(axis=0)

        history["loss"].append(loss)
        pbar.set_postfix({"loss": f"{loss:.4f}"})

    print("-" * 70)
    print(f"Initial loss: {history['loss'][0]:.4f}")
    print(f"Final loss:   {history['loss'][-1]:.4f}")

    os.makedirs(args.results_dir, exist_ok=True)
    history_path = os.path.join(args.results_dir, "decoder_history.npz")
    np.savez(history_path, **history)
    print(f"\nTraining history saved to {history_path}")

    state_path = os.path.join(args.results_dir, "loss_state.yaml")
    loss_fn.save(state_path)
    save_config(config, os.path.join(args.results_dir, "config.yaml"))
    print(f"Loss state saved to {state_path}")

    if args.plot:
        plot_history(history, os.path.join(args.results_dir, "decoder_loss.png"))

    return history


def plot_history(history, save_path: str):
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(history["loss"], color="tab:blue")
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Reconstruction loss")
    ax.grid(alpha=0.3)
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    print(f"Loss curve saved to {save_path}")


# ============================================================================
# Entry Point
# ============================================================================

def parse_args():
    parser = argparse.ArgumentParser(
        description="Fit a linear decoder with the reconstruction loss"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config merged over the defaults")
    parser.add_argument("--epochs", type=int, default=None,
                        help="Override the number of epochs")
    parser.add_argument("--lr", type=float, default=None,
                        help="Override the learning rate")
    parser.add_argument("--results-dir", type=str, default=RESULTS_DIR,
                        help=f"Results directory (default: {RESULTS_DIR})")
    parser.add_argument("--plot", action="store_true",
                        help="Save a plot of the loss curve")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    train(args)
