import logging
from decimal import Decimal

from libs.decimals import DECIMAL_ZERO, percent_of, quantize_decimal, to_decimal

from ..constants import RewardType

logger = logging.getLogger(__name__)


def calculate_reward(reward_type, reward_value, effective_base) -> Decimal:
    """Turn a reward definition into a money amount, never below zero."""
    if reward_type == RewardType.PERCENT:
        amount = percent_of(effective_base, reward_value)
    elif reward_type == RewardType.FIXED_AMOUNT:
        amount = quantize_decimal(to_decimal(reward_value))
    else:
        raise ValueError(f"Unknown reward type '{reward_type}'")

    if amount < 0:
        logger.warning(
            "Negative reward clamped to zero: type=%s value=%s base=%s amount=%s",
            reward_type,
            reward_value,
            effective_base,
            amount,
        )
        return DECIMAL_ZERO
    return amount


def reward_for_evaluation(rule, evaluation) -> Decimal:
    if not evaluation.applies:
        return DECIMAL_ZERO
    return calculate_reward(rule.reward_type, evaluation.reward_value, evaluation.effective_base)
