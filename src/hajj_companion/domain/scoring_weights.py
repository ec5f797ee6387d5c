from pydantic import BaseModel, ConfigDict, Field


class ScoringWeights(BaseModel):
    """
    Defines the points awarded by the lexical scorer.

    Args:
        keyword: Points per keyword found in the query.
        title: Bonus when the query contains the whole item title.
        content: Bonus when the query contains the whole item content.
    """

    keyword: int = Field(
        default=2,
        ge=0,
        description="Points added for each item keyword contained in the query.",
    )
    title: int = Field(
        default=2,
        ge=0,
        description="Flat bonus when the query contains the full item title.",
    )
    content: int = Field(
        default=1,
        ge=0,
        description="Flat bonus when the query contains the full item content.",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


DEFAULT_SCORING_WEIGHTS = ScoringWeights()
