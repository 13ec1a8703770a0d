"""HTTP transport for simulation requests.

Usage:
    python -m legion_sim.api.run

POST /api/simulate with {"request_id", "context", "iterations", "seed"}.
"""
