"""Swift binding generator for Rust structures marked with #[derive(Synapse)]."""

import logging

from .generation_run import generate_bindings

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["generate_bindings"]
