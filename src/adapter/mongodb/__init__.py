"""MongoDB adapters for the repository ports."""

USERS_COLLECTION_NAME = 'users'
PRODUCTS_COLLECTION_NAME = 'products'
NOTIFICATIONS_COLLECTION_NAME = 'notifications'
