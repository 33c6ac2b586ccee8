from sentirax.ui.views.home_view import HomeView
from sentirax.ui.views.results_view import ResultsView

__all__ = ["HomeView", "ResultsView"]
