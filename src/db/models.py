"""Database table name constants and enumerations."""

# Table names
PROFILES = "profiles"
VISITES = "visites"
VISITE_NOTES = "visite_notes"
RENDEZ_VOUS = "rendez_vous"
FAMILLES_PRODUITS = "familles_produits"
CATEGORIES_PRODUITS = "categories_produits"
PRODUITS = "produits"

# RPC functions
RPC_ADMIN_RESET_PASSWORD = "admin_reset_user_password"

# Role constants
ROLE_COMMERCIAL = "commercial"
ROLE_ADMIN = "admin"
ROLE_CONSULTANT = "consultant"
CATALOG_EDITOR_ROLES = {ROLE_ADMIN, ROLE_CONSULTANT}

# Visit defaults
STATUT_ACTION_DEFAULT = "en_attente"

# Appointment defaults
STATUT_RDV_DEFAULT = "planifie"
PRIORITE_RDV_DEFAULT = "normale"
DEFAULT_RDV_DURATION_MINUTES = 60
