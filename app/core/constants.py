"""Core constants: remote subscription service wire literals.

Single source of truth for namespaces and content type used by the
envelope codec and the subscription service client.
"""

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SUBSCRIPTION_SERVICE_NS = "http://services.kinokuniya/"
SOAP_CONTENT_TYPE = "text/xml"

# Local element names inside the envelope (namespace prefixes are ignored on parse)
ENVELOPE_TAG = "Envelope"
BODY_TAG = "Body"
FAULT_TAG = "Fault"
FAULT_STRING_TAG = "faultstring"

# Literals returned by approveSubscribe / rejectSubscribe
LITERAL_SUBSCRIPTION_ACCEPTED = "Subscription accepted"
LITERAL_SUBSCRIPTION_REJECTED = "Subscription rejected"
LITERAL_SUBSCRIPTION_NOT_FOUND = "Subscription not found"

# Generic message returned to clients when the remote service fails
SERVICE_UNAVAILABLE_MESSAGE = "Subscription service unavailable"
