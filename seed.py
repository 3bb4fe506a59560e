"""Sample quizzes, challenges and rewards for a fresh database."""

SAMPLE_QUIZZES = [
    {
        "title": "E-Waste Basics",
        "description": "Test your knowledge about electronic waste and recycling fundamentals",
        "category": "E-Waste Basics",
        "points": 100,
        "time_limit": 10,
        "difficulty": "easy",
        "status": "active",
        "questions": [
            {
                "id": "1",
                "question": "What does 'e-waste' stand for?",
                "options": ["Electronic waste", "Energy waste", "Environmental waste", "Electrical waste"],
                "correct_answer": 0,
                "explanation": "E-waste refers to discarded electrical or electronic devices.",
            },
            {
                "id": "2",
                "question": "Which of these items is considered e-waste?",
                "options": ["Old smartphone", "Plastic bottle", "Paper magazine", "Glass jar"],
                "correct_answer": 0,
                "explanation": "Smartphones contain electronic components and are e-waste when discarded.",
            },
            {
                "id": "3",
                "question": "What percentage of e-waste is currently recycled globally?",
                "options": ["Less than 20%", "About 50%", "More than 80%", "Nearly 100%"],
                "correct_answer": 0,
                "explanation": "Less than 20% of e-waste is properly recycled globally.",
            },
        ],
    },
    {
        "title": "Recycling Methods",
        "description": "Learn about different methods and processes used in e-waste recycling",
        "category": "Recycling Methods",
        "points": 150,
        "time_limit": 15,
        "difficulty": "medium",
        "status": "active",
        "questions": [
            {
                "id": "1",
                "question": "What is the first step in e-waste recycling?",
                "options": ["Shredding", "Collection and sorting", "Chemical treatment", "Melting"],
                "correct_answer": 1,
                "explanation": "Devices are collected and sorted before any material is recovered.",
            },
            {
                "id": "2",
                "question": "Which precious metal is commonly recovered from e-waste?",
                "options": ["Silver", "Gold", "Platinum", "All of the above"],
                "correct_answer": 3,
                "explanation": "Gold, silver and platinum can all be recovered and reused.",
            },
        ],
    },
]

SAMPLE_CHALLENGES = [
    {
        "title": "Device Collection Drive",
        "description": "Organize a community e-waste collection event in your neighborhood or workplace",
        "category": "Collection",
        "points": 200,
        "difficulty": "medium",
        "status": "active",
        "estimated_time": 120,
        "requirements": [
            "Set up a collection point for at least 4 hours",
            "Collect minimum 10 electronic devices",
            "Provide information about proper e-waste disposal",
            "Take photos of the collection event",
        ],
        "creator": "EcoQuest Admin",
    },
    {
        "title": "E-Waste Education Workshop",
        "description": "Conduct an educational session about e-waste recycling for your community",
        "category": "Education",
        "points": 150,
        "difficulty": "easy",
        "status": "active",
        "estimated_time": 60,
        "requirements": [
            "Present to at least 5 people",
            "Cover basics of e-waste and recycling",
            "Provide actionable tips for proper disposal",
            "Document the session with photos or video",
        ],
        "creator": "EcoQuest Admin",
    },
    {
        "title": "Social Media Awareness Campaign",
        "description": "Create and share content about e-waste recycling on social media platforms",
        "category": "Awareness",
        "points": 100,
        "difficulty": "easy",
        "status": "active",
        "estimated_time": 30,
        "requirements": [
            "Create 3 informative posts about e-waste",
            "Share on at least 2 social media platforms",
            "Use relevant hashtags (#ewaste #recycling #sustainability)",
        ],
        "creator": "EcoQuest Admin",
    },
]

SAMPLE_REWARDS = [
    {
        "title": "₹100 Amazon Voucher",
        "description": "Get ₹100 Amazon gift voucher to shop for your favorite products",
        "type": "voucher",
        "points_cost": 500,
        "value": 100,
        "value_type": "fixed",
        "stock": 50,
        "status": "active",
        "terms_and_conditions": "Valid for 6 months from date of issue. Non-refundable.",
    },
    {
        "title": "20% Off on Flipkart",
        "description": "Get 20% discount on your next Flipkart purchase (max ₹500)",
        "type": "discount",
        "points_cost": 300,
        "value": 20,
        "value_type": "percentage",
        "stock": 100,
        "status": "active",
        "terms_and_conditions": "Maximum discount of ₹500. Valid on orders above ₹1000.",
    },
    {
        "title": "₹50 Cashback",
        "description": "Instant ₹50 cashback to your wallet",
        "type": "cashback",
        "points_cost": 200,
        "value": 50,
        "value_type": "fixed",
        "stock": 200,
        "status": "active",
        "terms_and_conditions": "Cashback will be credited within 24 hours.",
    },
    {
        "title": "Free Movie Ticket",
        "description": "Get a free movie ticket at any PVR cinema",
        "type": "coupon",
        "points_cost": 800,
        "value": 250,
        "value_type": "fixed",
        "stock": 30,
        "status": "active",
        "terms_and_conditions": "Valid at all PVR locations. Subject to availability.",
    },
]
