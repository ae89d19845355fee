from .reconstruction import ReconstructionLoss, reconstruction_loss, reconstruction_loss_grad

__all__ = [
    "ReconstructionLoss",
    "reconstruction_loss",
    "reconstruction_loss_grad",
]
