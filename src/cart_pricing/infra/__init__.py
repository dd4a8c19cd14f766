"""Infrastructure adapters: storage backends and tabular export."""
