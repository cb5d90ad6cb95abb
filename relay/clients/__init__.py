from relay.clients.messenger import MessengerClient, SendError
from relay.clients.responder import AIResponderClient, ResponderError

__all__ = ["AIResponderClient", "MessengerClient", "ResponderError", "SendError"]
