"""Domain type definitions for giftlist.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in centavos (minor units)
- Cpf: Brazilian taxpayer number, digits only or XXX.XXX.XXX-XX
- DisplayDate: Date in DD/MM/YYYY format
- IsoInstant: ISO 8601 instant at UTC (YYYY-MM-DDTHH:MM:SS.mmmZ)
- Slug: Public list URL segment
"""

from typing import NewType

# Money amounts are handled as centavos (minor units) to avoid floating point errors
Money = NewType("Money", int)

# CPF as typed by the user, formatted or not
Cpf = NewType("Cpf", str)

# Display date is always DD/MM/YYYY (e.g., "29/02/2024")
DisplayDate = NewType("DisplayDate", str)

# Machine date sent to the backend (e.g., "2024-02-29T00:00:00.000Z")
IsoInstant = NewType("IsoInstant", str)

# Slug used in public list URLs (e.g., "casamento-ana-e-joao")
Slug = NewType("Slug", str)
