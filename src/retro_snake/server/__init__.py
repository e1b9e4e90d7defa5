"""HTTP and WebSocket host for simulation sessions."""
