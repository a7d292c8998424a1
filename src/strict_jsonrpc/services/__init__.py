"""Request validation, method registry and dispatch services."""
