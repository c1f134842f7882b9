"""Connect Four на двоих через WebSocket."""
