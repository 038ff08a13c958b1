"""Detective Quest: explore the mansion, collect clues, name the suspect."""

__version__ = "0.1.0"
