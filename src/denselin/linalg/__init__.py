from .layout import Matrix, ROW_MAJOR, COL_MAJOR, to_column_major, to_row_major
from .gemm import multiply, matmul
from .algebra import (lu_solve, solve_normal_equation, solve_least_squares,
                      solve_least_squares_inplace, column_rank, packed_residual_sse)
from .svd import SVDResult, svd, reconstruct, max_abs_error, decompose

__all__ = ['Matrix', 'ROW_MAJOR', 'COL_MAJOR', 'to_column_major', 'to_row_major',
           'multiply', 'matmul',
           'lu_solve', 'solve_normal_equation', 'solve_least_squares',
           'solve_least_squares_inplace', 'column_rank', 'packed_residual_sse',
           'SVDResult', 'svd', 'reconstruct', 'max_abs_error', 'decompose']
