"""HTTP API for separating, previewing and filing snippets."""
