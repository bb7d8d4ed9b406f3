"""I/O layer: Parquet schemas, output path conventions and layout files."""
