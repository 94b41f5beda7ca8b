"""Infrastructure layer: concrete transport, state machine, decorators."""
