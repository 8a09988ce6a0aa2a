"""Configuration, errors and concurrency primitives shared by the vector layer."""
