"""Command-line helpers and debugging hooks.

- :mod:`segment_log` cuts a recorded CSV log into samples from the shell.
- :mod:`plotter` draws the detected segments over the combined signal.
- :mod:`debug` provides opt-in timing instrumentation.
"""
