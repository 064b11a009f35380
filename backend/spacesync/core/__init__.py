"""Pure proximity engine: geometry, scoring, pair graph, simulation, flow."""
