"""
Fuzzle Reader

Reading support for dyslexic readers: lexical simplification, syllable
segmentation, word-synchronized narration and vocabulary building.
"""

__version__ = "1.0.0"
