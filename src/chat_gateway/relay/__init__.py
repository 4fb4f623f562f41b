"""
chat_gateway.relay

Chat relay package: message selection, provider invocation, reply normalization.
"""

# Package marker.
