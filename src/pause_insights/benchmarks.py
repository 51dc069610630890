"""Static prevalence figures and self-care tips per symptom.

These are fixed reference numbers shown next to a symptom, not cohort
statistics computed from other users.
"""

from dataclasses import dataclass, asdict
from typing import List, Optional


@dataclass
class Benchmark:
    """How common a symptom is during the menopause transition."""
    pct: int
    badge: str  # 'Very common', 'Common', 'Less common'
    note: str

    def to_dict(self) -> dict:
        return asdict(self)


BENCHMARKS = {
    "hot_flash": Benchmark(73, "Very common", "73% of perimenopausal women experience hot flashes"),
    "brain_fog": Benchmark(60, "Very common", "Brain fog affects ~60% of women during menopause transition"),
    "irritability": Benchmark(70, "Very common", "Mood changes affect ~70% of women in perimenopause"),
    "joint_pain": Benchmark(50, "Common", "Joint pain affects about half of menopausal women"),
    "anxiety": Benchmark(51, "Common", "Anxiety is reported by ~51% of women during menopause"),
    "fatigue": Benchmark(85, "Very common", "Fatigue is the #1 reported symptom at 85%"),
    "nausea": Benchmark(25, "Less common", "Nausea affects about 1 in 4 menopausal women"),
    "heart_racing": Benchmark(40, "Common", "Heart palpitations affect ~40% (hormonal, not cardiac)"),
}

RECOMMENDATIONS = {
    "hot_flash": [
        "Layer clothing for easy removal",
        "Keep a fan nearby at night",
        "Avoid spicy food and alcohol before bed",
    ],
    "brain_fog": [
        "Break tasks into smaller steps",
        "Write things down, lists help",
        "Prioritize sleep, it's #1 for cognition",
    ],
    "irritability": [
        "Take 3 deep breaths when triggered",
        "Communicate your needs to loved ones",
        "Regular exercise helps regulate mood",
    ],
    "joint_pain": [
        "Gentle stretching each morning",
        "Anti-inflammatory foods (omega-3, turmeric)",
        "Stay hydrated throughout the day",
    ],
    "anxiety": [
        "5 minutes of deep breathing daily",
        "Limit caffeine after noon",
        "Journal your worries, it reduces rumination",
    ],
    "fatigue": [
        "Consistent sleep/wake times",
        "Short walks boost energy more than caffeine",
        "Iron-rich foods may help",
    ],
    "nausea": [
        "Eat small, frequent meals",
        "Ginger tea can help",
        "Avoid lying down right after eating",
    ],
    "heart_racing": [
        "Deep breathing exercises",
        "Reduce caffeine intake",
        "Know that hormonal palpitations are typically benign",
    ],
}


def get_benchmark(key: str) -> Optional[Benchmark]:
    return BENCHMARKS.get(key)


def get_recommendations(key: str) -> List[str]:
    return list(RECOMMENDATIONS.get(key, []))
