from resume_analyzer.ai.types import ChatMessage
from resume_analyzer.core.analysis_config import get_analysis_int

_ANALYSIS_SYSTEM = (
    "You are an expert resume analyst and ATS specialist. "
    "Return ONLY valid JSON. No markdown, no explanation, just the JSON object."
)

_COVER_LETTER_SYSTEM = (
    "You are an expert career coach who writes specific, authentic cover letters. "
    "Return only the cover letter text, no extra commentary."
)

_ANALYSIS_SCHEMA = """{
  "candidateName": "Full name from resume",
  "score": 65,
  "industry": "software|data|marketing|finance|healthcare|design|sales|general",
  "experienceLevel": "mid",
  "atsScore": {"keywords": 70, "format": 75, "overall": 72},
  "contentScore": {"grammar": 80, "clarity": 70, "actionVerbs": 65},
  "atsCompatibility": {
    "overallScore": 72, "formattingScore": 75, "keywordScore": 70, "contentScore": 70,
    "improvementChecklist": ["Use standard section headers", "Add more quantified achievements"]
  },
  "formattingAnalysis": {
    "hasTables": false, "hasGraphics": false, "hasHeaders": false, "hasFooters": false,
    "usesStandardSections": true, "usesBulletPoints": true, "fontCompatible": true,
    "hasSpecialCharacters": false
  },
  "sectionAnalysis": {
    "summary": {"exists": true, "length": "medium", "keywordRich": true, "concise": true},
    "experience": {"usesActionVerbs": true, "quantifiedAchievements": false, "focusOnAccomplishments": true, "properFormatting": true},
    "skills": {"includesHardSkills": true, "includesSoftSkills": true, "industryRelevant": true, "properlyCategorized": false},
    "education": {"datesClear": true, "degreesListed": true, "institutionsNamed": true, "relevantCertifications": false}
  },
  "contentQuality": {
    "quantifiedAchievements": 30, "actionVerbUsage": 60,
    "vaguePhrases": ["responsible for", "helped with"],
    "genericStatements": ["team player", "hard worker"]
  },
  "suggestions": [
    {"type": "critical|important|minor", "title": "Add Quantified Achievements",
     "description": "Replace vague statements with numbers and results.",
     "example": "Led 8-person team delivering 3 products on time, saving $40K"}
  ],
  "keywords": {"found": ["Python", "SQL"], "missing": ["Docker", "AWS"], "jobSpecific": []},
  "strengths": ["Clear skills section"],
  "weaknesses": ["Lacks quantified achievements"],
  "recommendations": ["Add measurable results to each role"],
  "projectIdeas": ["Build a portfolio project using your top skills"],
  "trendingTechnologies": ["Docker", "Kubernetes"],
  "jobMatchScore": JOB_MATCH_SCORE,
  "jobMatchDetails": JOB_MATCH_DETAILS
}"""

_SCORING_RULES = """SCORING RULES (be realistic and strict):
- Start at 50 and adjust based on quality
- 90-100: Exceptional, very rare
- 80-89: Very good, minor issues
- 70-79: Good, a few areas to improve
- 60-69: Average, needs work
- 40-59: Below average, significant work needed
- <40: Needs major overhaul"""


def build_analysis_messages(resume_text: str, job_description: str | None = None) -> list[ChatMessage]:
    resume = (resume_text or "")[: get_analysis_int("prompt.resume_max_chars", 6000)]
    jd = (job_description or "").strip()

    if jd:
        jd = jd[: get_analysis_int("prompt.job_description_max_chars", 3000)]
        jd_section = (
            f"\n\nJOB DESCRIPTION TO MATCH AGAINST:\n{jd}\n\n"
            'Also calculate "jobMatchScore" (0-100) based on how well this resume matches the job '
            'description. Include "jobMatchDetails" with "matchingKeywords", "missingKeywords", and '
            '"tailoringTips" arrays.'
        )
        schema = _ANALYSIS_SCHEMA.replace("JOB_MATCH_SCORE", "75").replace(
            "JOB_MATCH_DETAILS",
            '{"matchingKeywords": ["Python"], "missingKeywords": ["Terraform"], "tailoringTips": ["Add cloud experience"]}',
        )
    else:
        jd_section = ""
        schema = _ANALYSIS_SCHEMA.replace("JOB_MATCH_SCORE", "null").replace("JOB_MATCH_DETAILS", "null")

    user = (
        "Analyze this resume comprehensively as an ATS specialist and career coach.\n\n"
        "IMPORTANT: Return ONLY a valid JSON object. No markdown, no text before or after the JSON.\n\n"
        f"Resume Text:\n{resume}{jd_section}\n\n"
        f"Return this exact JSON structure:\n{schema}\n\n"
        f"{_SCORING_RULES}\n\n"
        "Be specific, constructive, and actionable in all suggestions."
    )
    return [
        ChatMessage(role="system", content=_ANALYSIS_SYSTEM),
        ChatMessage(role="user", content=user),
    ]


def build_cover_letter_messages(
    resume_text: str,
    job_description: str,
    user_name: str | None = None,
) -> list[ChatMessage]:
    resume = resume_text[: get_analysis_int("prompt.cover_letter_resume_max_chars", 3000)]
    jd = job_description[: get_analysis_int("prompt.cover_letter_job_description_max_chars", 2000)]
    user = (
        "Write a compelling, personalized cover letter based on the resume and job description below.\n\n"
        f"Applicant name: {user_name or 'the applicant'}\n\n"
        f"RESUME:\n{resume}\n\n"
        f"JOB DESCRIPTION:\n{jd}\n\n"
        "Write a professional 3-paragraph cover letter that:\n"
        "1. Opens with a strong hook mentioning the specific role and company\n"
        "2. Highlights 2-3 most relevant achievements from the resume that match the job requirements\n"
        "3. Closes with a clear call to action\n\n"
        "Be specific, avoid cliches, and make it sound authentic."
    )
    return [
        ChatMessage(role="system", content=_COVER_LETTER_SYSTEM),
        ChatMessage(role="user", content=user),
    ]
