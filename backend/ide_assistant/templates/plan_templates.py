# Deterministic plans used when the generation backend is disabled, unreachable
# or returns text we can't parse. Checked in order; first keyword hit wins.

CANDY_STORE_PLAN = {
    "name": "Sweet Treats Store",
    "description": "A modern e-commerce platform for candy and confectionery sales with secure payments and inventory management",
    "type": "E-commerce Website",
    "features": [
        "Product catalog with candy categories and filtering",
        "Shopping cart with quantity management",
        "Secure user authentication and profiles",
        "Stripe payment processing integration",
        "Real-time inventory tracking",
        "Order management and tracking system",
        "Customer review and rating system",
        "Mobile-responsive design with PWA features",
        "Admin dashboard for product management",
        "Email notifications for orders",
    ],
    "technologies": [
        "React.js with TypeScript for frontend",
        "Node.js/Express for backend API",
        "PostgreSQL for data storage",
        "Stripe for payment processing",
        "JWT for authentication",
        "Tailwind CSS for styling",
        "Redis for session management",
        "Cloudinary for image storage",
    ],
    "preview": {
        "title": "Sweet Treats Store - Premium Candy E-commerce",
        "description": "A comprehensive online candy store with modern design, secure transactions, and excellent user experience",
        "sections": [
            "Homepage with featured candies and promotions",
            "Product catalog with advanced filtering",
            "Shopping cart and secure checkout",
            "User account management and order history",
            "Admin dashboard for inventory and orders",
            "Mobile app-like experience",
        ],
    },
}

SURF_SHOP_PLAN = {
    "name": "Wave Rider Surf Shop",
    "description": "An online surf shop for surfboards, wetsuits and accessories with board finder, rentals and lesson booking",
    "type": "E-commerce Website",
    "features": [
        "Product catalog for surfboards, wetsuits and accessories",
        "Board finder by skill level, wave type and volume",
        "Shopping cart and secure checkout",
        "Surfboard rental scheduling",
        "Surf lesson booking calendar",
        "Local surf conditions widget",
        "Customer accounts with order history",
        "Mobile-responsive storefront",
        "Admin dashboard for inventory and bookings",
    ],
    "technologies": [
        "React.js with TypeScript for frontend",
        "Node.js/Express for backend API",
        "PostgreSQL for data storage",
        "Stripe for payment processing",
        "Tailwind CSS for styling",
    ],
    "preview": {
        "title": "Wave Rider Surf Shop",
        "description": "Everything a surfer needs, from the right board to the next lesson",
        "sections": [
            "Homepage with featured boards and conditions",
            "Board finder and product catalog",
            "Rentals and lesson booking",
            "Cart and checkout",
        ],
    },
}

BLOG_PLAN = {
    "name": "Dynamic Blog Platform",
    "description": "A modern blogging platform with rich content management and social features",
    "type": "Content Management System",
    "features": [
        "Rich text editor with markdown support",
        "User authentication and author profiles",
        "Comment system with moderation",
        "Tag-based categorization",
        "Search functionality",
        "Social media integration",
        "SEO optimization tools",
        "Analytics dashboard",
    ],
    "technologies": [
        "React.js with Next.js",
        "Node.js/Express backend",
        "MongoDB for content storage",
        "Redis for caching",
        "Tailwind CSS for styling",
    ],
    "preview": {
        "title": "Modern Blog Platform",
        "description": "A feature-rich blogging platform with social features and content management",
        "sections": [
            "Homepage with latest posts",
            "Article reading interface",
            "Author dashboard",
            "Comment and interaction system",
        ],
    },
}

TODO_PLAN = {
    "name": "TaskFlow Manager",
    "description": "A task management application for organizing todos, projects and deadlines",
    "type": "Productivity Application",
    "features": [
        "Create, edit and delete tasks",
        "Mark tasks complete with progress tracking",
        "Due dates and reminders",
        "Priority levels and color labels",
        "Projects and task lists",
        "Search and filter by status, label or date",
        "Drag-and-drop reordering",
        "Local persistence with cloud sync",
    ],
    "technologies": [
        "React.js with TypeScript",
        "Node.js/Express backend",
        "PostgreSQL database",
        "Tailwind CSS for styling",
    ],
    "preview": {
        "title": "TaskFlow - Get Things Done",
        "description": "A focused workspace for everything on your plate",
        "sections": [
            "Today view with due tasks",
            "Project boards",
            "Task detail editor",
            "Settings and reminders",
        ],
    },
}

DEFAULT_PLAN = {
    "name": "Custom Web Application",
    "description": "A tailored full-stack web application built to your specific requirements",
    "type": "Web Application",
    "features": [
        "Modern responsive user interface",
        "User authentication and authorization",
        "Database integration with CRUD operations",
        "RESTful API endpoints",
        "Real-time updates and notifications",
        "Search and filtering capabilities",
        "Admin dashboard and management tools",
        "Mobile-responsive design",
        "Security best practices implementation",
        "Performance optimization",
    ],
    "technologies": [
        "React.js with TypeScript",
        "Node.js/Express backend",
        "PostgreSQL database",
        "JWT authentication",
        "Tailwind CSS for styling",
        "WebSocket for real-time features",
    ],
    "preview": {
        "title": "Custom Web Application",
        "description": "A modern, full-featured web application tailored to your needs",
        "sections": [
            "User-friendly frontend interface",
            "Robust backend API",
            "Database schema and management",
            "Authentication and security features",
        ],
    },
}

# (keywords, app types, plan)
PLAN_TEMPLATES: list[tuple[tuple[str, ...], tuple[str, ...], dict]] = [
    (("candy", "sweet"), (), CANDY_STORE_PLAN),
    (("surfboard", "surf"), (), SURF_SHOP_PLAN),
    (("blog", "content"), (), BLOG_PLAN),
    (("todo", "to-do", "task"), ("todo",), TODO_PLAN),
]

# Labels for the default plan's "type" when the classifier found an app type.
APP_TYPE_LABELS = {
    "e-commerce": "E-commerce",
    "social": "Social Platform",
    "dashboard": "Dashboard",
    "blog": "Content Management System",
    "portfolio": "Portfolio",
    "todo": "Productivity Application",
    "game": "Game",
    "education": "Education Platform",
    "finance": "Finance Application",
}
