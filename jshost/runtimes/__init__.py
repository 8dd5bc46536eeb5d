"""Engine bindings for interpreter instances.

Each subdirectory contains a BaseIsolate implementation for one embedded
JavaScript engine.
"""
