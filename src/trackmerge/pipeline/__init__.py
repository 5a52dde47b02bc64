from .runner import run, RunResult, discover_inputs, read_points, process_points
