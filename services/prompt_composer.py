"""
Prompt Composer
Fixed fashion-shot instruction template around the user's pose and background directions
"""

DEFAULT_POSE = "The model stands in a natural pose that suits a fashion shoot aesthetic."
DEFAULT_BACKGROUND = "Neutral grey studio backdrop with soft professional lighting."

PROMPT_TEMPLATE = """=== TASK ===
Dress the model in the given garment realistically, adjust the model into the pose described by the user,
and produce a high-resolution fashion photograph that is consistent with the described background scene.

=== EXPECTED STEPS ===
1. Realistic Garment Fitting: Fit the garment naturally to the model's body shape, movement and pose.
   Fabric folds, tension, shadows and light reflections must be physically accurate.
2. Pose Direction: The pose must be natural and anatomically correct.
   Leg, arm and torso proportions must not be deformed. Editorial style.
3. Background: Light direction, contrast and colour temperature must be consistent between the model and the background.
4. Final Image: A single image, high quality, professional fashion shoot level.

=== INPUT DETAILS ===
- Garment Photo: (first image)
- Model Photo: (second image)
- Pose Description: {pose}
- Background Description: {background}

Create a single final fashion photograph that follows these instructions."""


def compose(pose: str, background: str) -> str:
    """Render the instruction text, substituting defaults for blank directions"""
    return PROMPT_TEMPLATE.format(
        pose=pose if pose and pose.strip() else DEFAULT_POSE,
        background=background if background and background.strip() else DEFAULT_BACKGROUND,
    )
