"""simulation — Day-driven city economy.

This package implements the in-process core that the city-builder's UI
reads and writes: building decay, disasters, environment, trade and
research.  Everything is synchronous; one call either completes or is
refused with a notification.

Submodules
----------
efficiency      BuildingEfficiencyTracker — decay, maintenance, repair
environment     calculate_environmental_impact — pollution / greenery
disasters       DisasterRiskEngine — probability model + active list
market          TradeMarketSimulator — price trends + trade orders
research        ResearchGraph — prerequisite DAG + research slot
services        service_effectiveness — city service coverage scores
city_sim        CitySim — owns the grid and runs the daily pipeline
"""
