"""
Career Guide Service
LLM-backed career advice with keyword-selected canned answers as fallback
"""
from typing import Optional

from loguru import logger

from application.services.career_guide import ICareerGuideService
from core.exceptions import OracleException, ValidationException
from infrastructure.external.openrouter_client import OpenRouterClient


MAX_MESSAGE_LENGTH = 4000

SYSTEM_PROMPT = """You are an AI Career Guide specialized in providing advice about technology careers, certifications, and skill development. Your responses should:

1. Focus on practical, actionable advice
2. Recommend relevant certifications and courses
3. Suggest skill development paths based on current job market trends
4. Provide specific resources when possible
5. Keep responses concise and structured

When recommending certifications or courses:
- Prioritize widely recognized certifications
- Consider the user's current skill level
- Explain why specific certifications are valuable
- Include estimated time commitments and prerequisites

For skill recommendations:
- Focus on in-demand technologies
- Suggest learning paths
- Consider both technical and soft skills
- Base advice on current industry trends

Always maintain a professional yet encouraging tone."""

FALLBACK_GENERAL = """I'm currently experiencing some technical limitations, but I can provide some general career advice:

1. Focus on in-demand skills like:
   - Full-stack development
   - Cloud computing (AWS, Azure, GCP)
   - Data Science & AI/ML
   - DevOps & CI/CD

2. Recommended certifications:
   - AWS Certified Developer
   - Microsoft Azure Fundamentals
   - Google Cloud Associate Engineer
   - CompTIA Security+

3. Learning platforms:
   - Coursera
   - Udemy
   - freeCodeCamp
   - LinkedIn Learning

Would you like to know more about any of these areas?"""

FALLBACK_SKILLS = """Here are some key technical skills that are currently in high demand:

1. Programming Languages:
   - JavaScript/TypeScript
   - Python
   - Java
   - Go

2. Frameworks:
   - React/Next.js
   - Node.js
   - Django/Flask
   - Spring Boot

3. Tools & Technologies:
   - Docker & Kubernetes
   - Git
   - CI/CD tools
   - Cloud Platforms"""

FALLBACK_CERTIFICATIONS = """Popular technology certifications that can boost your career:

1. Cloud:
   - AWS Solutions Architect
   - Google Cloud Professional
   - Azure Administrator

2. Development:
   - Oracle Java Certification
   - MongoDB Developer
   - Kubernetes Application Developer

3. Project Management:
   - PMP
   - Scrum Master
   - PRINCE2"""


def fallback_advice(user_message: str) -> str:
    """Pick a canned answer by keywords in the question"""
    message = user_message.lower()
    if "skill" in message or "learn" in message:
        return FALLBACK_SKILLS
    if "certif" in message or "course" in message:
        return FALLBACK_CERTIFICATIONS
    return FALLBACK_GENERAL


class CareerGuideService(ICareerGuideService):
    """Career guide backed by an OpenRouter chat model"""

    def __init__(
        self,
        client: Optional[OpenRouterClient],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 500,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate_advice(self, user_message: str) -> str:
        if not user_message or not user_message.strip():
            raise ValidationException("message", "Message cannot be empty")
        if len(user_message) > MAX_MESSAGE_LENGTH:
            raise ValidationException("message", f"Message exceeds {MAX_MESSAGE_LENGTH} characters")

        if self.client is None:
            return fallback_advice(user_message)

        try:
            return await self.client.chat(
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_message.strip()},
                ],
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OracleException as e:
            logger.warning(f"Career guide falling back to canned advice: {e}")
            return fallback_advice(user_message)
