#!/usr/bin/env python3
"""
Maintained vocabularies for resume extraction: skills, role titles and
proficiency cue words.
"""

from typing import Dict, List, Tuple

# Canonical skill names as they are reported on a profile
SKILL_VOCABULARY: List[str] = [
    # Languages
    'python', 'java', 'javascript', 'typescript', 'c++', 'c#', 'ruby', 'php',
    'golang', 'rust', 'scala', 'kotlin', 'swift', 'sql', 'bash',
    # Web
    'react', 'angular', 'vue', 'node.js', 'next.js', 'nuxt.js', 'express',
    'html', 'css', 'scss', 'sass', 'tailwind', 'bootstrap', 'redux', 'vuex',
    'graphql', 'rest api', 'webpack', 'vite',
    # Backend frameworks
    'django', 'flask', 'fastapi', 'spring', 'rails', '.net',
    # Data stores
    'postgresql', 'mysql', 'mongodb', 'redis', 'nosql', 'elasticsearch', 'kafka',
    # Cloud / ops
    'aws', 'azure', 'gcp', 'docker', 'kubernetes', 'terraform', 'ansible',
    'linux', 'git', 'ci/cd', 'devops', 'jenkins', 'firebase', 'microservices',
    # Testing
    'jest', 'cypress', 'selenium', 'pytest', 'testing library',
    # Data / ML
    'pandas', 'numpy', 'spark', 'airflow', 'machine learning', 'tensorflow', 'pytorch',
    # Process
    'agile', 'scrum',
]

# Alternate spellings found in resumes -> canonical vocabulary entry
SKILL_SYNONYMS: Dict[str, str] = {
    'reactjs': 'react',
    'react.js': 'react',
    'nodejs': 'node.js',
    'node js': 'node.js',
    'vue.js': 'vue',
    'vuejs': 'vue',
    'nextjs': 'next.js',
    'postgres': 'postgresql',
    'k8s': 'kubernetes',
    'amazon web services': 'aws',
    'google cloud': 'gcp',
    'restful api': 'rest api',
    'rest apis': 'rest api',
    'restful apis': 'rest api',
    'go lang': 'golang',
    'ml': 'machine learning',
}

# Role titles recognized in the document head when no dated timeline exists
KNOWN_TITLES: List[str] = [
    'senior software engineer', 'staff software engineer', 'principal engineer',
    'senior developer', 'senior engineer', 'lead developer', 'lead engineer',
    'engineering manager', 'frontend developer', 'front-end developer',
    'backend developer', 'back-end developer', 'full stack developer',
    'fullstack developer', 'software engineer', 'software developer',
    'web developer', 'react developer', 'javascript developer',
    'python developer', 'java developer', 'devops engineer', 'data engineer',
    'data scientist', 'machine learning engineer', 'qa engineer',
    'test engineer', 'sdet', 'product manager', 'project manager',
]

# Words that mark a line fragment as a job title rather than a company
TITLE_KEYWORDS = (
    'engineer', 'developer', 'manager', 'architect', 'scientist', 'analyst',
    'designer', 'consultant', 'lead', 'director', 'intern', 'administrator',
    'specialist', 'programmer', 'sdet', 'tester', 'officer', 'head',
)

# Cue words near a skill mention -> proficiency, strongest first
PROFICIENCY_CUES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ('expert', ('expert', 'expertise', 'mastery')),
    ('advanced', ('advanced', 'proficient', 'strong', 'extensive', 'deep')),
    ('intermediate', ('intermediate', 'working knowledge', 'solid', 'familiar', 'experienced')),
    ('beginner', ('beginner', 'basic', 'elementary', 'exposure', 'novice')),
)
