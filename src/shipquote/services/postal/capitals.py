"""Approximate coordinates of each Brazilian state capital, keyed by state code (UF)."""

from __future__ import annotations

from typing import Optional

from ...models.domain import Coordinates

STATE_CAPITAL_COORDINATES: dict[str, Coordinates] = {
    "AC": Coordinates(-9.9747, -67.8243),   # Rio Branco
    "AL": Coordinates(-9.6658, -35.7353),   # Maceió
    "AP": Coordinates(0.0349, -51.0694),    # Macapá
    "AM": Coordinates(-3.1190, -60.0217),   # Manaus
    "BA": Coordinates(-12.9714, -38.5014),  # Salvador
    "CE": Coordinates(-3.7319, -38.5267),   # Fortaleza
    "DF": Coordinates(-15.7939, -47.8828),  # Brasília
    "ES": Coordinates(-20.3155, -40.3128),  # Vitória
    "GO": Coordinates(-16.6869, -49.2648),  # Goiânia
    "MA": Coordinates(-2.5297, -44.3028),   # São Luís
    "MT": Coordinates(-15.6014, -56.0979),  # Cuiabá
    "MS": Coordinates(-20.4697, -54.6201),  # Campo Grande
    "MG": Coordinates(-19.9167, -43.9345),  # Belo Horizonte
    "PA": Coordinates(-1.4558, -48.4902),   # Belém
    "PB": Coordinates(-7.1195, -34.8450),   # João Pessoa
    "PR": Coordinates(-25.4284, -49.2733),  # Curitiba
    "PE": Coordinates(-8.0476, -34.8770),   # Recife
    "PI": Coordinates(-5.0920, -42.8038),   # Teresina
    "RJ": Coordinates(-22.9068, -43.1729),  # Rio de Janeiro
    "RN": Coordinates(-5.7945, -35.2110),   # Natal
    "RS": Coordinates(-30.0346, -51.2177),  # Porto Alegre
    "RO": Coordinates(-8.7612, -63.9004),   # Porto Velho
    "RR": Coordinates(2.8235, -60.6758),    # Boa Vista
    "SC": Coordinates(-27.5954, -48.5480),  # Florianópolis
    "SP": Coordinates(-23.5505, -46.6333),  # São Paulo
    "SE": Coordinates(-10.9472, -37.0731),  # Aracaju
    "TO": Coordinates(-10.2491, -48.3243),  # Palmas
}


def capital_coordinates(state_code: str | None) -> Optional[Coordinates]:
    if not state_code:
        return None
    return STATE_CAPITAL_COORDINATES.get(state_code.strip().upper())
