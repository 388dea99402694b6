class SolverParams(dict):
    """
    A dictionary-like structure that enforces specific keys.

    pivot_tol : smallest accepted |LU pivot| relative to max|G|.
    rank_tol  : smallest accepted |diag R| relative to the largest one.
    n_grid    : number of points of a prediction grid.
    """
    allowed_keys = {"pivot_tol", "rank_tol", "n_grid"}
    default_values = {
        "pivot_tol": 1e-13,
        "rank_tol": 1e-10,
        "n_grid": 200,
    }

    def __init__(self, **kwargs):
        super().__init__()
        for key, value in kwargs.items():
            self[key] = value

    def __setitem__(self, key, value):
        if key not in self.allowed_keys:
            raise KeyError(f"'{key}' is not a valid key. Allowed keys are: {self.allowed_keys}")
        super().__setitem__(key, value)

    def __getitem__(self, key):
        if key not in self.allowed_keys:
            raise KeyError(f"'{key}' is not a valid key. Allowed keys are: {self.allowed_keys}")
        value = self.get(key)
        return self.default_values[key] if value is None else value

    def resolve(self, key, value=None):
        """Return `value` unless it is None, else the configured setting."""
        return self[key] if value is None else value


defaults = SolverParams()
