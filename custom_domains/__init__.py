"""Custom domain provisioning service: hosting + email domain attachment and DNS verification."""
