"""Mixed storefront workload.

Combines shopper and administrator journeys with weights that model a
storefront where most traffic is browsing, some is checkout and a little
is back-office work. This is the recommended scenario for a load baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.admin import CatalogueAndOrdersJourney
from loadtests.scenarios.shopping import BrowseJourney, CheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Browsing (70%): product lists, searches and detail views.
    Checkout (25%): register, fill a cart and place an order.
    Back office (5%): create products, read the dashboard, advance orders.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseJourney: 14,
        CheckoutJourney: 5,
        CatalogueAndOrdersJourney: 1,
    }
