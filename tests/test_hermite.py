import numpy as np
import pytest

from normalforms import (
    ColumnHermite,
    EntryOverflowError,
    IntegerMatrix,
    RoundingMode,
    RowHermite,
    column_hermite,
    column_hermite_inplace,
    is_unimodular,
    row_hermite,
    row_hermite_inplace,
)
from tests.helpers import (
    make_random_rows,
    matmul,
    transpose,
    verify_column_hermite,
    verify_row_hermite,
)

MODES = [RoundingMode.NEGATIVE_OFF_DIAGONAL, RoundingMode.POSITIVE_OFF_DIAGONAL]
SHAPES = [(1, 1), (3, 3), (4, 4), (2, 5), (5, 2), (4, 3)]


@pytest.mark.parametrize("seeded_rng", [42, 137, 2025], indirect=True)
@pytest.mark.parametrize("shape", SHAPES)
@pytest.mark.parametrize("mode", MODES)
def test_row_hermite_structural_properties(seeded_rng, shape, mode):
    A = make_random_rows(*shape)

    H, U = row_hermite(A, mode)

    assert matmul(U, A) == H, "U @ A != H"
    assert is_unimodular(U)
    assert verify_row_hermite(H, mode), f"not in row Hermite form: {H}"


@pytest.mark.parametrize("seeded_rng", [42, 137, 2025], indirect=True)
@pytest.mark.parametrize("shape", SHAPES)
@pytest.mark.parametrize("mode", MODES)
def test_column_hermite_structural_properties(seeded_rng, shape, mode):
    A = make_random_rows(*shape)

    H, U = column_hermite(A, mode)

    assert matmul(A, U) == H, "A @ U != H"
    assert is_unimodular(U)
    assert verify_column_hermite(H, mode), f"not in column Hermite form: {H}"


def test_full_rank_square_is_triangular_with_positive_diagonal():
    A = [[2, 3, 6], [-4, 1, 5], [3, 3, 7]]

    H = row_hermite(A).H
    assert all(H[i][j] == 0 for i in range(3) for j in range(i))
    assert all(H[i][i] > 0 for i in range(3))

    L = column_hermite(A).H
    assert all(L[i][j] == 0 for i in range(3) for j in range(i + 1, 3))
    assert all(L[i][i] > 0 for i in range(3))


@pytest.mark.parametrize(
    "mode, H, U",
    [
        (RoundingMode.NEGATIVE_OFF_DIAGONAL, [[1, -1], [0, 3]], [[1, -1], [0, 1]]),
        (RoundingMode.POSITIVE_OFF_DIAGONAL, [[1, 2], [0, 3]], [[1, 0], [0, 1]]),
    ],
)
def test_rounding_mode_picks_residue(mode, H, U):
    result = row_hermite([[1, 2], [0, 3]], mode)
    assert result.H == H
    assert result.U == U


def test_rounding_mode_accepts_aliases_and_values():
    A = [[1, 2], [0, 3]]
    assert row_hermite(A, RoundingMode.ROUND_DOWN).H == [[1, 2], [0, 3]]
    assert row_hermite(A, "up").H == [[1, -1], [0, 3]]
    with pytest.raises(ValueError):
        row_hermite(A, "sideways")


def test_rank_deficient_row_hermite_is_echelon():
    A = [[0, 2, 4], [0, 3, 6], [0, 1, 2]]
    H, U = row_hermite(A)
    assert H == [[0, 1, 2], [0, 0, 0], [0, 0, 0]]
    assert matmul(U, A) == H
    assert is_unimodular(U)


def test_zero_matrix_gives_identity_factor():
    H, U = row_hermite([[0, 0], [0, 0], [0, 0]])
    assert H == [[0, 0], [0, 0], [0, 0]]
    assert U == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]


@pytest.mark.parametrize("seeded_rng", [5, 6, 7], indirect=True)
@pytest.mark.parametrize("mode", MODES)
def test_idempotence(seeded_rng, mode):
    """Re-running on a Hermite form returns it unchanged with U = I."""
    A = make_random_rows(4, 4)

    H = row_hermite(A, mode).H
    again = row_hermite(H, mode)
    assert again.H == H
    assert again.U == np.eye(4, dtype=int).tolist()

    L = column_hermite(A, mode).H
    again = column_hermite(L, mode)
    assert again.H == L
    assert again.U == np.eye(4, dtype=int).tolist()


@pytest.mark.parametrize("seeded_rng", [8, 9, 10], indirect=True)
@pytest.mark.parametrize("shape", [(3, 3), (2, 4), (4, 2)])
def test_transpose_relation(seeded_rng, shape):
    A = make_random_rows(*shape)
    At = transpose(A)

    r = row_hermite(A)
    c = column_hermite(At)
    assert r.H == transpose(c.H)
    assert r.U == transpose(c.U)

    assert column_hermite(A).H == transpose(row_hermite(At).H)


def test_factorization_transpose():
    A = [[4, 1], [2, 3]]
    r = row_hermite(A)
    c = r.transpose()
    assert isinstance(c, ColumnHermite)
    assert matmul(transpose(A), c.U) == c.H
    assert isinstance(c.transpose(), RowHermite)


def test_diagonal_fast_path_matches_general_result():
    H, U = row_hermite([[7, 0, 0], [0, -12, 0], [0, 0, 6]])
    assert H == [[7, 0, 0], [0, 12, 0], [0, 0, 6]]
    assert U == [[1, 0, 0], [0, -1, 0], [0, 0, 1]]

    H, U = column_hermite([[7, 0, 0], [0, 12, 0], [0, 0, 6]])
    assert H == [[7, 0, 0], [0, 12, 0], [0, 0, 6]]
    assert U == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]


def test_copying_variant_leaves_input_untouched():
    A = [[2, 4], [6, 8]]
    row_hermite(A)
    column_hermite(A)
    assert A == [[2, 4], [6, 8]]


def test_inplace_variant_takes_ownership_of_lists():
    A = [[2, 4], [6, 8]]
    result = row_hermite_inplace(A)
    assert result.H is A
    assert A == [[2, 0], [0, 4]]


@pytest.mark.parametrize("mode", MODES)
def test_inplace_variants_split_shared_rows(mode):
    row = [2, 4]
    A = [row, row]
    result = column_hermite_inplace(A, mode)
    assert result.H is A
    assert A[0] is not A[1]
    assert matmul([[2, 4], [2, 4]], result.U) == A
    assert verify_column_hermite(A, mode)
    assert row == [2, 4]

    B = [[2, 4]] * 3
    result = row_hermite_inplace(B, mode)
    assert result.H is B
    assert matmul(result.U, [[2, 4], [2, 4], [2, 4]]) == B
    assert B == [[2, 4], [0, 0], [0, 0]]


def test_numpy_input_keeps_dtype():
    arr = np.array([[2, 4], [6, 8]], dtype=np.int32)
    result = column_hermite(arr)
    assert isinstance(result.H, np.ndarray)
    assert result.H.dtype == np.int32
    assert result.U.dtype == np.int32
    assert np.array_equal(arr @ result.U, result.H)
    assert arr.tolist() == [[2, 4], [6, 8]]

    out = column_hermite_inplace(arr)
    assert out.H is arr
    assert np.array_equal(arr, result.H)


def test_integer_matrix_input():
    A = IntegerMatrix.from_rows([[3, 5], [1, 2]])
    H, U = row_hermite(A)
    assert isinstance(H, IntegerMatrix)
    assert U @ A == H
    assert H.data == [[1, 0], [0, 1]]


def test_fixed_width_overflow_aborts_without_mutation():
    arr = np.array([[127, 126]], dtype=np.int8)
    with pytest.raises(EntryOverflowError):
        column_hermite_inplace(arr)
    assert arr.tolist() == [[127, 126]]

    with pytest.raises(OverflowError):
        row_hermite(arr.T.copy())


def test_big_integers_do_not_overflow():
    A = [[10**20 + 1, 10**20], [10**20, 10**20 - 1]]
    H, U = row_hermite(A)
    assert matmul(U, A) == H
    assert H == [[1, 0], [0, 1]]
