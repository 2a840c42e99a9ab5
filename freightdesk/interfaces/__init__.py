"""HTTP and future transport adapters."""
