"""Smoke tests for the matplotlib drawings."""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from tncodes.codes import TensorNetworkCode, five_qubit_code, rotated_surface_code  # noqa: E402
from tncodes.distance import tn_operator_weights  # noqa: E402
from tncodes.plotting import plot_code, plot_operator, plot_operator_weights  # noqa: E402


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


class TestPlotting:
    """Each drawing returns populated axes."""

    def test_plot_code(self):
        ax = plot_code(rotated_surface_code(3), show_labels=True)
        assert ax.get_title() == rotated_surface_code(3).name
        assert len(ax.collections) >= 2

    def test_plot_code_on_given_axes(self):
        fig, ax = plt.subplots()
        assert plot_code(TensorNetworkCode.from_code(five_qubit_code()), ax=ax) is ax

    def test_plot_operator(self):
        code = rotated_surface_code(3)
        ax = plot_operator(code, code.logicals[0], title="Logical X")
        assert ax.get_title() == "Logical X"
        assert ax.get_legend() is not None

    def test_plot_operator_wrong_length(self):
        with pytest.raises(ValueError):
            plot_operator(rotated_surface_code(3), (1, 0))

    def test_plot_operator_weights(self):
        weights = tn_operator_weights(TensorNetworkCode.from_code(five_qubit_code()))
        ax = plot_operator_weights(weights)
        assert ax.get_xlabel() == "Weight"
