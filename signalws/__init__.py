"""WebSocket signalling server for WebRTC peers: wire format, lobbies, hub and aiohttp app."""

__version__ = "0.1.0"