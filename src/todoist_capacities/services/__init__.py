"""Services used by the webhook relay."""
