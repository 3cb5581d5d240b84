"""Client lifecycle event names"""

from enum import Enum


class ClientEvent(str, Enum):
    """Events announced on the client event bus

    Lifecycle Events:
        - CONNECTED: Client constructed and ready
        - DISCONNECTED: Client closed
        - AUTH_STATE_CHANGED: Bearer identity replaced or restored
        - ERROR: A request failed (payload is the NexusError)

    Domain Events (announced by higher-level callers):
        - MODEL_UPLOADED
        - MODEL_DOWNLOADED
        - PURCHASE_COMPLETED
    """

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    AUTH_STATE_CHANGED = "authStateChanged"
    MODEL_UPLOADED = "modelUploaded"
    MODEL_DOWNLOADED = "modelDownloaded"
    PURCHASE_COMPLETED = "purchaseCompleted"
    ERROR = "error"
