"""logtest infrastructure layer: Rust source adapters."""
