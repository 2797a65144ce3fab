"""slideclaw - agent-generated HTML slide decks with PDF/PPTX export."""

__version__ = "0.1.0"
