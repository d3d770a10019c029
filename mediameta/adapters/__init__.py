"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes.

Sous-packages :
- api/ : Transport HTTP resilient (httpx, tenacity, token bucket)
- openlibrary/ : Fournisseur de metadonnees de livres Open Library

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""
