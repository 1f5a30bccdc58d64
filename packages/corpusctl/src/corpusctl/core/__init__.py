"""Runtime primitives shared by corpusctl commands."""
