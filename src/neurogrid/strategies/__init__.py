from neurogrid.strategies.base import NoPlanError, Strategy
from neurogrid.strategies.planned import FixedPlan, PlanFollowing
