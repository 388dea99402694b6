import numpy as np
import pandas as pd
import pytest

from denselin.errors import InvalidArgument, InvalidDimensions, SingularSystem, RankDeficient
from denselin.stats import SampleSet, PolynomialFit, FitResult, fit_polynomial, predict, design_matrix


def generate_quadratic_data(n=50, noise=0.0):
    """
    Create a simple quadratic dataset: y = 0.5*x^2 - 2*x + 3 + noise.
    """
    rng = np.random.default_rng(0)
    x = np.linspace(-3, 3, n)
    y = 0.5 * x ** 2 - 2 * x + 3 + noise * rng.standard_normal(n)
    return x, y


def sse_of(theta, samples):
    return sum((predict(theta, x) - y) ** 2 for x, y in samples)


def test_design_matrix_columns():
    X = design_matrix([0.0, 1.0, 2.0], 2)
    assert isinstance(X, pd.DataFrame)
    assert X.columns[-1] == 'Intercept'
    assert X.columns[1] == 'x'
    assert np.array_equal(X.to_numpy(), [[0, 0, 1], [1, 1, 1], [4, 2, 1]])
    X3 = design_matrix([2.0], 3)
    assert np.array_equal(X3.to_numpy(), [[8, 4, 2, 1]])


def test_design_matrix_rejects_degree_zero():
    with pytest.raises(InvalidArgument):
        design_matrix([1.0, 2.0], 0)


def test_linear_fit_example(linear_samples):
    result = fit_polynomial(linear_samples, n_params=2)
    assert isinstance(result, FitResult)
    assert result.method == 'normal'
    assert np.allclose(result.theta, [1.1, 0.5], atol=1e-12)
    assert result.sse == pytest.approx(0.7, rel=1e-10)
    assert result.mse == pytest.approx(0.175, rel=1e-10)
    assert np.allclose(result.table['y_hat'], [1.6, 2.7, 3.8, 4.9])
    assert np.allclose(result.table['err'], [-0.4, 0.7, -0.2, -0.1])


def test_linear_fit_is_local_minimum(linear_samples):
    theta = fit_polynomial(linear_samples, n_params=2).theta
    best = sse_of(theta, linear_samples)
    assert best >= 0
    h = 1e-3
    for delta in ([h, 0], [-h, 0], [0, h], [0, -h], [h, h], [-h, h]):
        assert sse_of(theta + np.array(delta), linear_samples) > best


def test_linear_fit_methods_agree(linear_samples):
    normal = fit_polynomial(linear_samples, n_params=2, method='normal')
    qr = fit_polynomial(linear_samples, n_params=2, method='qr')
    assert np.allclose(normal.theta, qr.theta, rtol=1e-6)
    assert normal.sse == pytest.approx(qr.sse, rel=1e-6)


def test_quadratic_fit_example(quadratic_samples):
    result = fit_polynomial(quadratic_samples, n_params=3)
    assert result.method == 'qr'
    assert result.theta.shape == (3,)
    x, y = map(np.array, zip(*quadratic_samples))
    expected = np.polyfit(x, y, 2)
    assert np.allclose(result.theta, expected, rtol=1e-8)

    # SSE reported equals the one rebuilt from the residual column
    err = result.table['y_hat'] - result.table['y']
    assert np.allclose(err, result.table['err'])
    assert result.sse == pytest.approx(float(np.sum(err ** 2)), rel=1e-12)
    assert result.mse == pytest.approx(result.sse / 6, rel=1e-12)


def test_quadratic_fit_methods_agree(quadratic_samples):
    qr = fit_polynomial(quadratic_samples, n_params=3)
    normal = fit_polynomial(quadratic_samples, n_params=3, method='normal')
    assert np.allclose(normal.theta, qr.theta, rtol=1e-6)


def test_exact_quadratic_recovered():
    x, y = generate_quadratic_data(n=40)
    model = PolynomialFit(degree=2).fit(x, y)
    assert np.allclose(model.coef_, [0.5, -2.0, 3.0], atol=1e-10)
    assert model.intercept_ == pytest.approx(3.0, abs=1e-10)
    assert np.allclose(model.resid, 0.0, atol=1e-10)
    assert model.statistics_['r2'] == pytest.approx(1.0, abs=1e-12)
    assert model.coefficients().index.tolist() == list(model.column_names)


def test_cubic_fit_with_noise():
    rng = np.random.default_rng(1)
    x = np.linspace(-2, 2, 80)
    y = x ** 3 - x + 0.01 * rng.standard_normal(80)
    model = PolynomialFit(degree=3).fit(x, y)
    assert np.allclose(model.coef_, [1.0, 0.0, -1.0, 0.0], atol=0.02)
    assert model.statistics_['dof']['error'] == 76


def test_predict_pure_function():
    theta = [2.0, -1.0, 0.5]
    assert predict(theta, 2.0) == pytest.approx(2 * 4 - 2 + 0.5)
    grid = np.array([0.0, 1.0, 3.0])
    assert np.allclose(predict(theta, grid), 2 * grid ** 2 - grid + 0.5)


def test_predict_on_new_grid(linear_samples):
    model = PolynomialFit(degree=1).fit(*zip(*linear_samples))
    assert np.allclose(model.predict([0.0, 10.0]), [0.5, 11.5])
    assert np.array_equal(model.predict(), model.y_pred_)
    result = fit_polynomial(linear_samples)
    assert result.predict(10.0) == pytest.approx(11.5)


def test_summary_table(linear_samples):
    model = PolynomialFit(degree=1).fit(*zip(*linear_samples))
    table = model.summary()
    assert list(table.columns) == ['x', 'y', 'y_hat', 'err']
    assert len(table) == 4


def test_identical_x_normal_path():
    samples = [(3.0, 1.0), (3.0, 2.0), (3.0, 4.0), (3.0, 5.0)]
    with pytest.raises(SingularSystem):
        fit_polynomial(samples, n_params=2)


def test_identical_x_factorization_path():
    samples = [(2.0, y) for y in (1.0, 2.0, 3.0, 4.0, 5.0)]
    with pytest.raises(RankDeficient):
        fit_polynomial(samples, n_params=3)
    with pytest.raises(RankDeficient):
        fit_polynomial(samples, n_params=2, method='qr')


def test_failed_fit_leaves_model_unfitted():
    model = PolynomialFit(degree=1)
    with pytest.raises(SingularSystem):
        model.fit([1.0, 1.0, 1.0], [1.0, 2.0, 3.0])
    assert model.coef_ is None
    with pytest.raises(ValueError):
        model.predict()


@pytest.mark.parametrize("n_params", [0, 1, 4])
def test_fit_polynomial_rejects_parameter_count(linear_samples, n_params):
    with pytest.raises(InvalidArgument):
        fit_polynomial(linear_samples, n_params=n_params)


def test_unknown_method(linear_samples):
    with pytest.raises(InvalidArgument):
        fit_polynomial(linear_samples, method='svd')


def test_input_validation():
    model = PolynomialFit(degree=1)
    with pytest.raises(InvalidDimensions):
        model.fit([1.0, 2.0, 3.0], [1.0, 2.0])
    with pytest.raises(InvalidDimensions):
        model.fit([], [])
    with pytest.raises(ValueError):
        model.fit([1.0, np.nan, 3.0], [1.0, 2.0, 3.0])


def test_predict_before_fit_raises():
    model = PolynomialFit(degree=2)
    with pytest.raises(ValueError):
        _ = model.predict()
    with pytest.raises(ValueError):
        _ = model.resid


def test_params_roundtrip():
    model = PolynomialFit(degree=2, method='normal')
    assert model.get_params() == {'degree': 2, 'method': 'normal', 'pivot_tol': None, 'rank_tol': None}
    model.set_params(method='qr', rank_tol=1e-8)
    assert model.get_params()['method'] == 'qr'
    with pytest.raises(ValueError):
        model.set_params(alpha=1.0)


def test_sample_set():
    samples = SampleSet.from_pairs([(0, 1.2), (1, 2.0)])
    assert len(samples) == 2
    assert list(samples) == [(0.0, 1.2), (1.0, 2.0)]
    with pytest.raises(ValueError):
        samples.x[0] = 5.0
    with pytest.raises(InvalidDimensions):
        SampleSet([1.0, 2.0], [1.0])
    with pytest.raises(InvalidDimensions):
        SampleSet.from_pairs([])
    result = fit_polynomial(SampleSet([1, 2, 3, 4], [2, 2, 4, 5]))
    assert np.allclose(result.theta, [1.1, 0.5])


def test_large_x_linear_fit_normal_path(linear_samples):
    samples = [(x * 1e7, y) for x, y in linear_samples]
    result = fit_polynomial(samples, n_params=2, method='normal')
    assert np.allclose(result.theta, [1.1e-7, 0.5], rtol=1e-8)
    assert result.sse == pytest.approx(0.7, rel=1e-6)
    qr = fit_polynomial(samples, n_params=2, method='qr')
    assert np.allclose(qr.theta, result.theta, rtol=1e-6)


def test_large_x_quadratic_fit_both_paths():
    x = np.arange(6) * 1e5
    y = 2e-10 * x ** 2 + 3e-5 * x + 1
    samples = list(zip(x, y))
    qr = fit_polynomial(samples, n_params=3)
    assert np.allclose(qr.theta, [2e-10, 3e-5, 1.0], rtol=1e-8)
    normal = fit_polynomial(samples, n_params=3, method='normal')
    assert np.allclose(normal.theta, qr.theta, rtol=1e-6)


def test_offset_x_quadratic_fit(quadratic_samples):
    # x over 2000..2005: full column rank, badly conditioned; the qr path fits it
    x, y = map(np.array, zip(*quadratic_samples))
    x = x + 2000.0
    result = fit_polynomial(zip(x, y), n_params=3)
    expected = np.polyfit(x, y, 2)
    assert np.allclose(result.theta, expected, rtol=1e-6)
    assert np.allclose(result.table['y_hat'], np.polyval(expected, x), atol=1e-6)
    shifted = fit_polynomial(quadratic_samples, n_params=3)
    assert result.sse == pytest.approx(shifted.sse, rel=1e-6)
