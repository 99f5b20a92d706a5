# ==============================================
# Calorific Values
# ==============================================
#
# PURPOSE:
#   For wood fuels the usable energy depends on the water content,
#   so it is more than just the calorific value stored on the fuel.
#
# ==============================================

# Energy needed to evaporate the water in the wood, kWh per t of water.
WATER_EVAPORATION_ENERGY = 680.0


def calorific_value_for_wood(
    wood_mass: float = 1.0,
    water_content: float = 0.2,
    calorific_value: float = 5200.0,
) -> float:
    """
    Usable energy of a wood amount.

    Args:
        wood_mass: Mass of the wood in t
        water_content: Water content as fraction (0.2 = 20 %)
        calorific_value: Calorific value of dry wood in kWh/t

    Returns:
        Energy in kWh
    """
    return wood_mass * (
        (1 - water_content) * calorific_value - water_content * WATER_EVAPORATION_ENERGY
    )
