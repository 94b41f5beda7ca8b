"""Application layer: consumers driving an injected ITransport."""
