"""
Static game data for the Detective Quest mansion.
"""

# Clue found in each clue-bearing room.
ROOM_CLUES = {
    "Sala de Estar": "Um copo quebrado.",
    "Jardim de Inverno": "Flores pisoteadas.",
    "Escritorio do Sr. Black": "Documento rasgado.",
    "Quarto de Hospedes": "Pequena mancha de oleo.",
}

# (name, left, right) for every room, root first. Children must appear later.
MANSION_LAYOUT = [
    ("Hall de Entrada", "Sala de Estar", "Biblioteca"),
    ("Sala de Estar", "Cozinha", "Jardim de Inverno"),
    ("Biblioteca", "Escritorio do Sr. Black", "Sala de Jantar"),
    ("Cozinha", "Sotao", None),
    ("Jardim de Inverno", None, "Quarto de Hospedes"),
    ("Escritorio do Sr. Black", None, None),
    ("Sala de Jantar", "Adega", "Garagem"),
    ("Sotao", None, None),
    ("Quarto de Hospedes", None, None),
    ("Adega", None, None),
    ("Garagem", None, None),
]

ENTRANCE = "Hall de Entrada"

# Suspicion seeded when the mansion is built, in insertion order.
SUSPECT_ASSOCIATIONS = [
    ("Mordomo", "Chave do Escritorio"),
    ("Cozinheira", "Faca de cozinha faltando"),
    ("Jardineiro", "Pegadas de lama"),
    ("Mordomo", "Carta de divida"),
    ("Cozinheira", "Digitais na taca"),
    ("Jardineiro", "Rastros de areia"),
]

# Player commands
CMD_LEFT = "e"
CMD_RIGHT = "d"
CMD_QUIT = "s"
CMD_VIEW = "v"
COMMANDS = (CMD_LEFT, CMD_RIGHT, CMD_QUIT, CMD_VIEW)
