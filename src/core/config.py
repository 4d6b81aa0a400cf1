"""
Constants shared by the engine and the layers around it.
"""

# Chess board is always 8x8 (rows, cols)
BOARD_DIMENSIONS = (8, 8)

# Placement part of the FEN string for the standard starting position.
# Row 0 of the grid is the first rank listed (black's back rank).
STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
