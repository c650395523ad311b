"""NUMS lottery-data tracking backend."""
