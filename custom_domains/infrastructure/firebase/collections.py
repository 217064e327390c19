"""Firestore collection names.

Firestore creates collections on first write; this constant is the single
place the name is spelled. Settings.domain_configs_collection overrides it
per deployment.
"""

# One document per tenant, document id = tenant id.
COLLECTION_DOMAIN_CONFIGS = "domain_configs"
