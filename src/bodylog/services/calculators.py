"""Body metric formulas: BMI, BMR and US Navy body fat."""

import math

from ..errors import ValidationError
from ..models.calculator import ActivityLevel, Gender

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

# Upper bounds (exclusive) for each body fat category, by gender
BODY_FAT_CATEGORIES = {
    Gender.MALE: [
        (6, "Essential"),
        (14, "Athletes"),
        (18, "Fitness"),
        (22, "Average"),
        (26, "Above Average"),
    ],
    Gender.FEMALE: [
        (14, "Essential"),
        (21, "Athletes"),
        (25, "Fitness"),
        (32, "Average"),
        (36, "Above Average"),
    ],
}

MAX_BODY_FAT = 50.0


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index, rounded to one decimal place."""
    height_m = height_cm / 100
    return round(weight_kg / height_m**2, 1)


def bmi_category(bmi: float) -> str:
    """WHO adult BMI category."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def calculate_bmr(weight_kg: float, height_cm: float, age: float, gender: Gender) -> float:
    """Basal metabolic rate using the Mifflin-St Jeor equation."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        return base + 5
    return base - 161


def daily_calories(bmr: float, activity_level: ActivityLevel) -> float:
    """Daily calorie needs for an activity level."""
    return bmr * ACTIVITY_MULTIPLIERS.get(activity_level, 1.2)


def calculate_body_fat(
    height_cm: float,
    waist_cm: float,
    neck_cm: float,
    gender: Gender,
    hips_cm: float | None = None,
) -> float:
    """Body fat percentage using the US Navy circumference method.

    Raises:
        ValidationError: If the measurements cannot produce a realistic result.
    """
    if gender == Gender.MALE:
        waist_minus_neck = waist_cm - neck_cm
        if waist_minus_neck <= 0:
            raise ValidationError.for_field(
                "waist",
                f"waist ({waist_cm:g}cm) must be larger than neck ({neck_cm:g}cm)",
            )
        body_fat = (
            495
            / (1.0324 - 0.19077 * math.log10(waist_minus_neck) + 0.15456 * math.log10(height_cm))
            - 450
        )
    else:
        if not hips_cm:
            raise ValidationError.for_field("hips", "hip measurement is required for women")
        circumference = waist_cm + hips_cm - neck_cm
        if circumference <= 0:
            raise ValidationError.for_field(
                "waist", "waist + hips - neck must be positive"
            )
        body_fat = (
            495
            / (1.29579 - 0.35004 * math.log10(circumference) + 0.22100 * math.log10(height_cm))
            - 450
        )

    if body_fat < 0:
        raise ValidationError(
            f"Body fat percentage cannot be negative ({body_fat:.1f}%). "
            "Please check your measurements."
        )
    if body_fat > MAX_BODY_FAT:
        raise ValidationError(
            f"Body fat percentage seems too high ({body_fat:.1f}%). "
            "Please check your measurements."
        )
    return round(body_fat, 1)


def body_fat_category(body_fat: float, gender: Gender) -> str:
    """Navy body fat category for a percentage."""
    for upper, name in BODY_FAT_CATEGORIES[gender]:
        if body_fat < upper:
            return name
    return "Obese"
