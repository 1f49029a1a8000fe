"""Local client/server demonstration of the handshake and message exchange."""
