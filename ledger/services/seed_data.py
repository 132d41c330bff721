"""Demo content inserted by ``seed_database``."""

SEED_VERSION = '2024.1'


NEWS_CATEGORIES = [
    {'name': 'Automation', 'slug': 'automation', 'color': '#3B82F6', 'icon': 'bot', 'display_order': 1},
    {'name': 'Regulatory', 'slug': 'regulatory', 'color': '#8B5CF6', 'icon': 'scale', 'display_order': 2},
    {'name': 'Fraud Detection', 'slug': 'fraud-detection', 'color': '#EF4444', 'icon': 'shield', 'display_order': 3},
    {'name': 'Generative AI', 'slug': 'generative-ai', 'color': '#10B981', 'icon': 'sparkles', 'display_order': 4},
]

_AVATAR = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=300&h=300"

CONTRIBUTORS = [
    {
        'email': 'sarah.mitchell@example.com', 'first_name': 'Sarah', 'last_name': 'Mitchell',
        'title': 'Senior Tax Manager', 'company': 'Deloitte',
        'profile_image_url': _AVATAR.format('photo-1494790108377-be9c29b29330'),
        'expertise_tags': ['Tax Automation', 'AI Integration'],
        'bio': 'Leading AI-powered tax automation initiatives at Deloitte. 15+ years in tax consulting.',
        'points': 2847, 'badges': ['AI Pioneer', 'Top Contributor'],
    },
    {
        'email': 'james.rodriguez@example.com', 'first_name': 'James', 'last_name': 'Rodriguez',
        'title': 'Chief Audit Technology Officer', 'company': 'KPMG',
        'profile_image_url': _AVATAR.format('photo-1507003211169-0a1dd7228f2d'),
        'expertise_tags': ['Audit Analytics', 'Machine Learning'],
        'bio': "Championing ML-driven audit procedures across KPMG's global network.",
        'points': 2654, 'badges': ['Innovator', 'Expert Badge'],
    },
    {
        'email': 'emily.chen@example.com', 'first_name': 'Emily', 'last_name': 'Chen',
        'title': 'AI Research Director', 'company': 'PwC',
        'profile_image_url': _AVATAR.format('photo-1438761681033-6461ffad8d80'),
        'expertise_tags': ['Natural Language Processing', 'Financial Analysis'],
        'bio': 'Developing NLP solutions for financial document analysis and compliance checking.',
        'points': 2531, 'badges': ['Research Leader', 'AI Champion'],
    },
    {
        'email': 'michael.oconnor@example.com', 'first_name': 'Michael', 'last_name': "O'Connor",
        'title': 'Partner, Advisory Services', 'company': 'EY',
        'profile_image_url': _AVATAR.format('photo-1500648767791-00dcc994a43e'),
        'expertise_tags': ['Blockchain', 'Smart Contracts'],
        'bio': 'Blockchain and smart contract specialist advising on audit automation and transparency.',
        'points': 2398, 'badges': ['Blockchain Expert'],
    },
    {
        'email': 'priya.sharma@example.com', 'first_name': 'Priya', 'last_name': 'Sharma',
        'title': 'Forensic Accounting Lead', 'company': 'Grant Thornton',
        'profile_image_url': _AVATAR.format('photo-1573496359142-b8d87734a5a2'),
        'expertise_tags': ['Fraud Detection', 'Data Analytics'],
        'bio': 'Using AI to detect sophisticated fraud patterns in financial transactions.',
        'points': 2276, 'badges': ['Fraud Fighter', 'Data Wizard'],
    },
    {
        'email': 'david.kim@example.com', 'first_name': 'David', 'last_name': 'Kim',
        'title': 'Technology Risk Manager', 'company': 'BDO',
        'profile_image_url': _AVATAR.format('photo-1472099645785-5658abf4ff4e'),
        'expertise_tags': ['Cybersecurity', 'Risk Management'],
        'bio': 'Implementing AI-driven risk assessment frameworks for emerging technologies.',
        'points': 2103, 'badges': ['Security Pro'],
    },
    {
        'email': 'lisa.thompson@example.com', 'first_name': 'Lisa', 'last_name': 'Thompson',
        'title': 'Controller', 'company': 'Tesla',
        'profile_image_url': _AVATAR.format('photo-1580489944761-15a19d654956'),
        'expertise_tags': ['Financial Reporting', 'Process Automation'],
        'bio': 'Transforming month-end close processes with AI automation at a Fortune 500 company.',
        'points': 1987, 'badges': ['Process Master'],
    },
    {
        'email': 'robert.williams@example.com', 'first_name': 'Robert', 'last_name': 'Williams',
        'title': 'AI Solutions Architect', 'company': 'Accenture',
        'profile_image_url': _AVATAR.format('photo-1519085360753-af0119f7cbe7'),
        'expertise_tags': ['Cloud Computing', 'AI Architecture'],
        'bio': 'Designing scalable AI solutions for finance and accounting transformations.',
        'points': 1845, 'badges': ['Cloud Expert', 'Architect'],
    },
    {
        'email': 'angela.martinez@example.com', 'first_name': 'Angela', 'last_name': 'Martinez',
        'title': 'VP of Finance Technology', 'company': 'Amazon',
        'profile_image_url': _AVATAR.format('photo-1487412720507-e7ab37603c6f'),
        'expertise_tags': ['Digital Transformation', 'Change Management'],
        'bio': 'Leading finance tech initiatives and AI adoption strategies at scale.',
        'points': 1723, 'badges': ['Transformation Leader'],
    },
    {
        'email': 'thomas.anderson@example.com', 'first_name': 'Thomas', 'last_name': 'Anderson',
        'title': 'Managing Director', 'company': 'RSM',
        'profile_image_url': _AVATAR.format('photo-1506794778202-cad84cf45f1d'),
        'expertise_tags': ['Strategic Planning', 'AI Ethics'],
        'bio': 'Guiding mid-market firms through ethical AI adoption in accounting practices.',
        'points': 1598, 'badges': ['Ethics Champion'],
    },
]

_ARTICLE_IMAGE = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=400"

ARTICLES = [
    {
        'title': 'How Machine Learning is Revolutionizing Audit Procedures in 2024',
        'content': (
            'New AI-powered audit tools are showing 94% accuracy in detecting financial anomalies, '
            'transforming traditional audit methodologies across major accounting firms. Machine learning '
            'algorithms are now capable of analyzing thousands of transactions in minutes, identifying '
            'patterns that would take human auditors weeks to discover.'
        ),
        'excerpt': (
            'New AI-powered audit tools are showing 94% accuracy in detecting financial anomalies, '
            'transforming traditional audit methodologies across major accounting firms.'
        ),
        'category': 'automation',
        'image_url': _ARTICLE_IMAGE.format('photo-1551434678-e076c223a692'),
        'source_url': 'https://example.com/ml-audit-revolution',
        'source_name': 'Jennifer Lawrence',
        'is_featured': True,
        'days_ago': 1,
    },
    {
        'title': 'New FASB Guidelines for AI-Generated Financial Reports',
        'content': (
            'The Financial Accounting Standards Board releases new guidance on transparency requirements for '
            'AI-assisted financial reporting and disclosure obligations. These guidelines aim to ensure '
            'stakeholders understand when and how AI is used in preparing financial statements.'
        ),
        'excerpt': (
            'The Financial Accounting Standards Board releases new guidance on transparency requirements for '
            'AI-assisted financial reporting and disclosure obligations.'
        ),
        'category': 'regulatory',
        'image_url': _ARTICLE_IMAGE.format('photo-1554224155-8d04cb21cd6c'),
        'source_url': 'https://example.com/fasb-ai-guidelines',
        'source_name': 'Michael Chen',
        'is_featured': True,
        'days_ago': 2,
    },
    {
        'title': 'AI Fraud Detection Prevents $2.3B in Losses for Fortune 500 Companies',
        'content': (
            'Latest industry report shows advanced AI algorithms successfully identified and prevented '
            'fraudulent transactions with 99.2% accuracy rate. The technology combines behavioral analytics, '
            'pattern recognition, and real-time monitoring to detect anomalies.'
        ),
        'excerpt': (
            'Latest industry report shows advanced AI algorithms successfully identified and prevented '
            'fraudulent transactions with 99.2% accuracy rate.'
        ),
        'category': 'fraud-detection',
        'image_url': _ARTICLE_IMAGE.format('photo-1507003211169-0a1dd7228f2d'),
        'source_url': 'https://example.com/ai-fraud-prevention',
        'source_name': 'Sarah Johnson',
        'days_ago': 3,
    },
    {
        'title': 'GPT-4 Integration in Tax Software Reduces Prep Time by 60%',
        'content': (
            "Major tax preparation platforms report dramatic efficiency gains after integrating OpenAI's GPT-4 "
            'for document analysis and tax code interpretation. Early adopters are seeing significant '
            'reductions in time spent on routine tax filings.'
        ),
        'excerpt': (
            "Major tax preparation platforms report dramatic efficiency gains after integrating OpenAI's GPT-4 "
            'for document analysis and tax code interpretation.'
        ),
        'category': 'generative-ai',
        'image_url': _ARTICLE_IMAGE.format('photo-1633265486064-086b219458ec'),
        'source_url': 'https://example.com/gpt4-tax-software',
        'source_name': 'David Martinez',
        'days_ago': 4,
    },
    {
        'title': 'Automated Reconciliation Systems Save Big Four Firms 100,000 Hours Annually',
        'content': (
            'Industry analysis reveals that AI-powered reconciliation systems deployed across the Big Four '
            'accounting firms are saving approximately 100,000 collective hours per year, allowing '
            'accountants to focus on higher-value advisory work.'
        ),
        'excerpt': (
            'Industry analysis reveals that AI-powered reconciliation systems deployed across the Big Four '
            'accounting firms are saving approximately 100,000 collective hours per year.'
        ),
        'category': 'automation',
        'image_url': _ARTICLE_IMAGE.format('photo-1454165804606-c3d57bc86b40'),
        'source_url': 'https://example.com/automated-reconciliation',
        'source_name': 'Emily Rodriguez',
        'days_ago': 5,
    },
    {
        'title': 'SEC Proposes New Rules for AI Use in Financial Disclosures',
        'content': (
            'The Securities and Exchange Commission has announced proposed regulations requiring companies to '
            'disclose their use of artificial intelligence in preparing financial statements and conducting '
            'internal audits.'
        ),
        'excerpt': (
            'The Securities and Exchange Commission has announced proposed regulations requiring companies to '
            'disclose their use of artificial intelligence in preparing financial statements.'
        ),
        'category': 'regulatory',
        'image_url': _ARTICLE_IMAGE.format('photo-1450101499163-c8848c66ca85'),
        'source_url': 'https://example.com/sec-ai-rules',
        'source_name': 'Robert Thompson',
        'days_ago': 6,
    },
    {
        'title': 'Neural Networks Detect Complex Money Laundering Schemes',
        'content': (
            'Advanced neural network systems are now capable of identifying sophisticated money laundering '
            'patterns across multiple jurisdictions, helping financial institutions comply with AML '
            'regulations more effectively.'
        ),
        'excerpt': (
            'Advanced neural network systems are now capable of identifying sophisticated money laundering '
            'patterns across multiple jurisdictions.'
        ),
        'category': 'fraud-detection',
        'image_url': _ARTICLE_IMAGE.format('photo-1563013544-824ae1b704d3'),
        'source_url': 'https://example.com/neural-aml',
        'source_name': 'Lisa Wang',
        'days_ago': 7,
    },
    {
        'title': 'ChatGPT Plugins Transform Client Communication for Small CPA Firms',
        'content': (
            'Small to mid-size CPA firms are leveraging ChatGPT plugins to automate routine client inquiries, '
            'schedule meetings, and provide instant answers to common tax questions, improving client '
            'satisfaction scores by 45%.'
        ),
        'excerpt': (
            'Small to mid-size CPA firms are leveraging ChatGPT plugins to automate routine client inquiries '
            'and provide instant answers to common tax questions.'
        ),
        'category': 'generative-ai',
        'image_url': _ARTICLE_IMAGE.format('photo-1551836022-deb4988cc6c0'),
        'source_url': 'https://example.com/chatgpt-cpa-firms',
        'source_name': 'Amanda Foster',
        'days_ago': 8,
    },
    {
        'title': 'Robotic Process Automation Handles 80% of Accounts Payable Tasks',
        'content': (
            'New data shows that RPA bots are now handling the majority of routine accounts payable processes, '
            'including invoice processing, payment authorization, and vendor communications, with error rates '
            'below 0.1%.'
        ),
        'excerpt': (
            'New data shows that RPA bots are now handling the majority of routine accounts payable processes '
            'with error rates below 0.1%.'
        ),
        'category': 'automation',
        'image_url': _ARTICLE_IMAGE.format('photo-1486406146926-c627a92ad1ab'),
        'source_url': 'https://example.com/rpa-accounts-payable',
        'source_name': 'Christopher Lee',
        'days_ago': 9,
    },
    {
        'title': 'PCAOB Issues Guidance on AI Auditor Independence Requirements',
        'content': (
            'The Public Company Accounting Oversight Board has released comprehensive guidance on maintaining '
            'auditor independence when using AI tools, addressing concerns about algorithmic bias and data '
            'privacy.'
        ),
        'excerpt': (
            'The Public Company Accounting Oversight Board has released comprehensive guidance on maintaining '
            'auditor independence when using AI tools.'
        ),
        'category': 'regulatory',
        'image_url': _ARTICLE_IMAGE.format('photo-1589829545856-d10d557cf95f'),
        'source_url': 'https://example.com/pcaob-ai-guidance',
        'source_name': "Patricia O'Brien",
        'days_ago': 10,
    },
    {
        'title': 'Predictive Analytics Identify High-Risk Audit Areas with 91% Accuracy',
        'content': (
            'Cutting-edge predictive analytics platforms are helping auditors identify high-risk areas before '
            'fieldwork begins, significantly improving audit efficiency and effectiveness while reducing '
            'overall costs.'
        ),
        'excerpt': (
            'Cutting-edge predictive analytics platforms are helping auditors identify high-risk areas before '
            'fieldwork begins with 91% accuracy.'
        ),
        'category': 'fraud-detection',
        'image_url': _ARTICLE_IMAGE.format('photo-1460925895917-afdab827c52f'),
        'source_url': 'https://example.com/predictive-audit-analytics',
        'source_name': 'Mark Stevens',
        'days_ago': 11,
    },
]

_HOST = 'Sarah Chen'

PODCASTS = [
    {
        'episode_number': 3, 'title': 'The Future of AI in Tax Compliance',
        'description': (
            'Dr. Michael Roberts from Deloitte discusses how AI is transforming tax compliance, from automated '
            'return preparation to real-time tax position analysis.'
        ),
        'duration': '42:18', 'image_url': _ARTICLE_IMAGE.format('photo-1590650153855-d9e808231d41'),
        'guest_name': 'Dr. Michael Roberts', 'guest_title': 'Director of Tax Innovation, Deloitte',
        'days_ago': 3, 'play_count': 1247, 'is_featured': True,
    },
    {
        'episode_number': 4, 'title': 'Blockchain Auditing: AI-Powered Verification',
        'description': (
            'Jennifer Wu, Chief Blockchain Officer at PwC, shares insights on using AI to audit blockchain '
            'transactions and smart contracts.'
        ),
        'duration': '38:45', 'image_url': _ARTICLE_IMAGE.format('photo-1639762681485-074b7f938ba0'),
        'guest_name': 'Jennifer Wu', 'guest_title': 'Chief Blockchain Officer, PwC',
        'days_ago': 7, 'play_count': 892,
    },
    {
        'episode_number': 5, 'title': 'ChatGPT in the Accounting Firm: Real Stories',
        'description': (
            'Managing Partner David Martinez shares practical experiences implementing ChatGPT and GPT-4 in a '
            'mid-sized accounting firm.'
        ),
        'duration': '51:22', 'image_url': _ARTICLE_IMAGE.format('photo-1557804506-669a67965ba0'),
        'guest_name': 'David Martinez', 'guest_title': 'Managing Partner, Martinez & Associates',
        'days_ago': 14, 'play_count': 1534,
    },
    {
        'episode_number': 6, 'title': 'Fraud Detection 2.0: Machine Learning in Action',
        'description': (
            'Forensic accountant Lisa Morgan demonstrates how machine learning models are catching fraud that '
            'traditional methods miss.'
        ),
        'duration': '44:15', 'image_url': _ARTICLE_IMAGE.format('photo-1551836022-4c4c79ecde51'),
        'guest_name': 'Lisa Morgan', 'guest_title': 'Lead Forensic Accountant, Grant Thornton',
        'days_ago': 21, 'play_count': 1109,
    },
    {
        'episode_number': 7, 'title': 'AI Ethics in Accounting: Drawing the Line',
        'description': (
            'Professor Amanda Foster discusses the ethical implications of AI in accounting and where we should '
            'draw boundaries.'
        ),
        'duration': '47:30', 'image_url': _ARTICLE_IMAGE.format('photo-1531482615713-2afd69097998'),
        'guest_name': 'Prof. Amanda Foster', 'guest_title': 'Chair of Accounting Ethics, MIT',
        'days_ago': 28, 'play_count': 967,
    },
    {
        'episode_number': 8, 'title': 'Natural Language Processing for Financial Documents',
        'description': (
            'AI researcher Dr. Kevin Park explains how NLP is revolutionizing financial document analysis and '
            'contract review.'
        ),
        'duration': '40:55', 'image_url': _ARTICLE_IMAGE.format('photo-1552664730-d307ca884978'),
        'guest_name': 'Dr. Kevin Park', 'guest_title': 'AI Research Lead, KPMG Labs',
        'days_ago': 35, 'play_count': 834,
    },
    {
        'episode_number': 9, 'title': 'Automating Month-End Close: Best Practices',
        'description': 'Controller Rachel Green shares her journey automating the month-end close process using AI and RPA.',
        'duration': '36:42', 'image_url': _ARTICLE_IMAGE.format('photo-1542744173-8e7e53415bb0'),
        'guest_name': 'Rachel Green', 'guest_title': 'Corporate Controller, Microsoft',
        'days_ago': 42, 'play_count': 1223,
    },
    {
        'episode_number': 10, 'title': 'Will AI Replace Accountants? The Real Answer',
        'description': 'Industry leaders debate the future of the accounting profession in an AI-driven world.',
        'duration': '53:18', 'image_url': _ARTICLE_IMAGE.format('photo-1560472355-109703aa3edc'),
        'guest_name': 'Panel Discussion', 'guest_title': 'Industry Leaders from Big Four',
        'days_ago': 49, 'play_count': 2156,
    },
    {
        'episode_number': 11, 'title': 'Real-Time Financial Reporting with AI',
        'description': (
            'CFO James Patterson discusses implementing AI for continuous accounting and real-time financial '
            'insights.'
        ),
        'duration': '45:27', 'image_url': _ARTICLE_IMAGE.format('photo-1556761175-5973dc0f32e7'),
        'guest_name': 'James Patterson', 'guest_title': 'CFO, Shopify',
        'days_ago': 56, 'play_count': 1378,
    },
    {
        'episode_number': 12, 'title': 'AI for Small Accounting Practices',
        'description': (
            'Solo practitioner Maria Gonzalez shares affordable AI tools and strategies for small firms to '
            'compete with larger practices.'
        ),
        'duration': '39:12', 'image_url': _ARTICLE_IMAGE.format('photo-1573164713714-d95e436ab8d6'),
        'guest_name': 'Maria Gonzalez', 'guest_title': 'CPA, Small Practice Owner',
        'days_ago': 63, 'play_count': 1645,
    },
]

for _episode in PODCASTS:
    _episode.setdefault('host_name', _HOST)
    _episode.setdefault('audio_url', f"https://example.com/podcast-{_episode['episode_number']}.mp3")

_THUMB = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300"

RESOURCES = [
    {
        'title': 'Complete Guide to AI in Financial Reporting',
        'description': (
            'Comprehensive 120-page guide covering AI applications in financial reporting, from automation to '
            'predictive analytics.'
        ),
        'type': 'guide', 'category': 'Financial Reporting', 'difficulty': 'beginner',
        'file_url': 'https://example.com/resources/ai-financial-reporting-guide.pdf',
        'image_url': _THUMB.format('photo-1554224155-8d04cb21cd6c'), 'download_count': 2347,
    },
    {
        'title': 'Machine Learning for Auditors Video Course',
        'description': '8-hour video course teaching auditors how to leverage machine learning in audit procedures.',
        'type': 'video', 'category': 'Audit', 'difficulty': 'intermediate', 'duration': '8h',
        'url': 'https://example.com/resources/ml-auditors-course',
        'image_url': _THUMB.format('photo-1516321318423-f06f85e504b3'), 'download_count': 1876,
    },
    {
        'title': 'Tax Automation Templates and Scripts',
        'description': 'Ready-to-use Python scripts and templates for automating common tax preparation tasks.',
        'type': 'template', 'category': 'Tax', 'difficulty': 'advanced',
        'file_url': 'https://example.com/resources/tax-automation-templates.zip',
        'image_url': _THUMB.format('photo-1554224154-26032ffc0d07'), 'download_count': 1654,
    },
    {
        'title': 'AI Ethics Framework for Accountants',
        'description': 'Ethical guidelines and decision-making framework for implementing AI in accounting practices.',
        'type': 'guide', 'category': 'Ethics', 'difficulty': 'beginner',
        'file_url': 'https://example.com/resources/ai-ethics-framework.pdf',
        'image_url': _THUMB.format('photo-1450101499163-c8848c66ca85'), 'download_count': 1432,
    },
    {
        'title': 'Fraud Detection Algorithm Case Studies',
        'description': 'Real-world case studies of successful AI fraud detection implementations.',
        'type': 'case-study', 'category': 'Fraud Detection', 'difficulty': 'intermediate',
        'file_url': 'https://example.com/resources/fraud-detection-cases.pdf',
        'image_url': _THUMB.format('photo-1563013544-824ae1b704d3'), 'download_count': 1287,
    },
    {
        'title': 'ChatGPT Prompts for Accountants',
        'description': 'Collection of 200+ optimized ChatGPT prompts for accounting tasks and client communication.',
        'type': 'template', 'category': 'AI Tools', 'difficulty': 'beginner',
        'file_url': 'https://example.com/resources/chatgpt-prompts.pdf',
        'image_url': _THUMB.format('photo-1677442136019-21780ecad995'), 'download_count': 2156,
    },
    {
        'title': 'RPA Implementation Roadmap',
        'description': 'Step-by-step guide to implementing robotic process automation in accounting workflows.',
        'type': 'guide', 'category': 'Automation', 'difficulty': 'intermediate',
        'file_url': 'https://example.com/resources/rpa-roadmap.pdf',
        'image_url': _THUMB.format('photo-1485827404703-89b55fcc595e'), 'download_count': 1543,
    },
    {
        'title': 'AI Regulatory Compliance Checklist',
        'description': 'Comprehensive checklist for ensuring AI implementations meet regulatory requirements.',
        'type': 'tool', 'category': 'Compliance', 'difficulty': 'beginner',
        'file_url': 'https://example.com/resources/ai-compliance-checklist.pdf',
        'image_url': _THUMB.format('photo-1589829545856-d10d557cf95f'), 'download_count': 1398,
    },
    {
        'title': 'Webinar: AI in Month-End Close',
        'description': 'Recorded webinar on automating month-end close processes with AI and best practices.',
        'type': 'video', 'category': 'Financial Reporting', 'difficulty': 'intermediate', 'duration': '1h 15m',
        'url': 'https://example.com/resources/month-end-webinar',
        'image_url': _THUMB.format('photo-1542744173-8e7e53415bb0'), 'download_count': 987,
    },
    {
        'title': 'Natural Language Processing Toolkit',
        'description': 'Open-source toolkit for analyzing financial documents using NLP.',
        'type': 'tool', 'category': 'AI Tools', 'difficulty': 'advanced',
        'file_url': 'https://example.com/resources/nlp-toolkit.zip',
        'image_url': _THUMB.format('photo-1555949963-ff9fe0c870eb'), 'download_count': 743,
    },
    {
        'title': 'Blockchain Audit Procedures Manual',
        'description': 'Detailed manual covering audit procedures for blockchain-based transactions.',
        'type': 'guide', 'category': 'Blockchain', 'difficulty': 'advanced',
        'file_url': 'https://example.com/resources/blockchain-audit-manual.pdf',
        'image_url': _THUMB.format('photo-1639762681485-074b7f938ba0'), 'download_count': 856,
    },
    {
        'title': 'Small Firm AI Adoption Strategy',
        'description': 'Practical strategies and affordable tools for small accounting firms to adopt AI.',
        'type': 'guide', 'category': 'Practice Management', 'difficulty': 'beginner',
        'file_url': 'https://example.com/resources/small-firm-ai-strategy.pdf',
        'image_url': _THUMB.format('photo-1573164713714-d95e436ab8d6'), 'download_count': 1234,
    },
]

TOOLBOX_APPS = [
    {
        'name': 'Close Checklist Assistant',
        'description': 'Tracks month-end close tasks and flags reconciliations that are running late.',
        'section': 'controller', 'status': 'beta_ready', 'display_order': 1,
    },
    {
        'name': 'Journal Entry Reviewer',
        'description': 'Scores manual journal entries for unusual amounts, timing and account combinations.',
        'section': 'controller', 'status': 'testing', 'display_order': 2,
    },
    {
        'name': 'Variance Narrator',
        'description': 'Drafts budget-versus-actual commentary from the variance report for analyst review.',
        'section': 'fpa', 'status': 'ready_for_commercial_use', 'display_order': 1,
    },
    {
        'name': 'Driver-Based Forecast Builder',
        'description': 'Builds rolling forecasts from operational drivers and compares scenarios side by side.',
        'section': 'fpa', 'status': 'developing', 'display_order': 2,
    },
]

FORUM_CATEGORIES = [
    {
        'name': 'AI Implementation',
        'description': 'Share experiences and best practices for implementing AI solutions in accounting workflows.',
        'color': '#3B82F6',
        'icon': 'cpu',
    },
    {
        'name': 'Regulatory Compliance',
        'description': 'Navigate evolving regulations and compliance requirements for AI in financial reporting.',
        'color': '#8B5CF6',
        'icon': 'scale',
    },
    {
        'name': 'Learning & Development',
        'description': 'Career growth, certification paths, and skill development in AI accounting technologies.',
        'color': '#06B6D4',
        'icon': 'graduation-cap',
    },
]

# ``author`` and ``category`` refer to contributor emails and forum category names
DISCUSSIONS = [
    {
        'key': 'reconciliation',
        'title': 'Which reconciliation tools are you piloting this year?',
        'content': 'We are comparing three vendors for bank reconciliation. What has worked for your team?',
        'category': 'AI Implementation',
        'author': 'lisa.thompson@example.com',
        'is_pinned': True,
    },
    {
        'key': 'disclosure',
        'title': 'Documenting AI use for the SEC disclosure proposal',
        'content': 'How are you recording which models touch the financial statements?',
        'category': 'Regulatory Compliance',
        'author': 'james.rodriguez@example.com',
    },
    {
        'key': 'certifications',
        'title': 'Worthwhile certifications for AI in accounting',
        'content': 'Looking for courses that go beyond prompt writing. Recommendations welcome.',
        'category': 'Learning & Development',
        'author': 'emily.chen@example.com',
    },
]

# ``parent`` refers to the index of an earlier reply in the same discussion
REPLIES = [
    {'discussion': 'reconciliation', 'author': 'robert.williams@example.com',
     'content': 'We started with the matching engine in our ERP before buying anything new.'},
    {'discussion': 'reconciliation', 'author': 'lisa.thompson@example.com', 'parent': 0,
     'content': 'Did that cover intercompany accounts as well?'},
    {'discussion': 'disclosure', 'author': 'priya.sharma@example.com',
     'content': 'A model inventory owned by the controller group has worked well for us.'},
    {'discussion': 'certifications', 'author': 'thomas.anderson@example.com',
     'content': 'The AI ethics modules from the state CPA society were practical.'},
    {'discussion': 'certifications', 'author': 'sarah.mitchell@example.com',
     'content': 'Pair any course with a small automation project so the skills stick.'},
]
