from .inverted import InvertedIndex, Hit, SIMILARITIES
