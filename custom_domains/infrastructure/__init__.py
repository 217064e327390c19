"""Infrastructure: Firestore store and provider HTTP clients."""
