"""
Couche domaine (core).

Contient le modele canonique, les ports (interfaces abstraites) et la
taxonomie d'erreurs. Cette couche n'a AUCUNE dependance vers l'infrastructure
(httpx, BeautifulSoup, frameworks).

Sous-packages :
- entities/ : Modele de donnees canonique (MediaDetails, MediaSearchItem, ...)
- ports/ : Interfaces abstraites implementees par les fournisseurs
- exceptions : Erreurs typees remontees aux appelants
"""
