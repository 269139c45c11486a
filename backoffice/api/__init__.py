"""HTTP layer: blueprints, authorization gate, result dispatch and error handlers."""
