"""
Seed content for local development

Rows reference each other by symbolic name (username, post slug) and by
time offsets; seed.FixtureBuilder resolves both at load time.
"""

from datetime import timedelta

from schemas import (
    CommentStatus,
    LoginFailReason,
    PostStatus,
    PostType,
    PostVisibility,
    SettingGroup,
    UserRole,
    UserStatus,
)

HOUR = timedelta(hours=1)
# the welcome post is the most recent publication
WELCOME_PUBLISHED = -timedelta(days=7)
GUIDE_PUBLISHED = -timedelta(days=14)

# Dev-only passwords, hashed by the credential subsystem when loaded
USERS = [
    {
        "username": "admin",
        "password": "admin123",
        "email": "admin@heimdall.com",
        "display_name": "系统管理员",
        "role": UserRole.OWNER,
        "bio": "Heimdall 博客系统管理员",
        "location": "北京",
        "website": "https://heimdall.com",
        "status": UserStatus.ACTIVE,
        "last_login_ip": "127.0.0.1",
    },
    {
        "username": "author",
        "password": "author123",
        "email": "author@heimdall.com",
        "display_name": "示例作者",
        "role": UserRole.AUTHOR,
        "bio": "一个热爱写作的技术博主",
        "location": "上海",
        "website": "https://author.blog",
        "twitter": "author_blog",
        "status": UserStatus.ACTIVE,
        "last_login_ip": "127.0.0.1",
    },
]

SETTINGS = [
    ("title", "Heimdall Blog", SettingGroup.GENERAL),
    ("description", "一个基于 Go-Zero 的现代化博客系统", SettingGroup.GENERAL),
    ("logo", "", SettingGroup.GENERAL),
    ("favicon", "", SettingGroup.GENERAL),
    ("language", "zh-CN", SettingGroup.GENERAL),
    ("timezone", "Asia/Shanghai", SettingGroup.GENERAL),
    ("postsPerPage", "10", SettingGroup.DISPLAY),
    ("theme", "default", SettingGroup.DISPLAY),
    ("showExcerpts", "true", SettingGroup.DISPLAY),
    ("showReadingTime", "true", SettingGroup.DISPLAY),
    ("metaTitle", "Heimdall Blog - 技术分享与思考", SettingGroup.SEO),
    ("metaDescription", "分享技术心得，记录成长历程", SettingGroup.SEO),
    ("enableSitemap", "true", SettingGroup.SEO),
    ("enableRSS", "true", SettingGroup.SEO),
    ("twitter", "", SettingGroup.SOCIAL),
    ("facebook", "", SettingGroup.SOCIAL),
    ("github", "", SettingGroup.SOCIAL),
    ("enableComments", "true", SettingGroup.COMMENTS),
    ("requireApproval", "true", SettingGroup.COMMENTS),
    ("allowGuestComments", "true", SettingGroup.COMMENTS),
]

WELCOME_MARKDOWN = """# 欢迎使用 Heimdall 博客系统

## 关于 Heimdall

Heimdall 是一个基于 Go-Zero 框架开发的现代化博客系统。它采用微服务架构，具有以下特点：

- **高性能**: 基于 Go 语言和 go-zero 框架
- **微服务架构**: admin-api + public-api + common 的清晰架构
- **MongoDB + Redis**: 现代化的数据存储方案
- **完善的安全机制**: JWT认证、登录限制、操作审计
- **SEO友好**: 支持自定义URL、sitemap、RSS等

## 快速开始

1. 配置数据库连接
2. 运行数据库初始化脚本
3. 启动服务
4. 开始创作

祝您使用愉快！"""

WELCOME_HTML = """<h1>欢迎使用 Heimdall 博客系统</h1>
<h2>关于 Heimdall</h2>
<p>Heimdall 是一个基于 Go-Zero 框架开发的现代化博客系统。它采用微服务架构，具有以下特点：</p>
<ul>
<li><strong>高性能</strong>: 基于 Go 语言和 go-zero 框架</li>
<li><strong>微服务架构</strong>: admin-api + public-api + common 的清晰架构</li>
<li><strong>MongoDB + Redis</strong>: 现代化的数据存储方案</li>
<li><strong>完善的安全机制</strong>: JWT认证、登录限制、操作审计</li>
<li><strong>SEO友好</strong>: 支持自定义URL、sitemap、RSS等</li>
</ul>
<h2>快速开始</h2>
<ol>
<li>配置数据库连接</li>
<li>运行数据库初始化脚本</li>
<li>启动服务</li>
<li>开始创作</li>
</ol>
<p>祝您使用愉快！</p>"""

GUIDE_MARKDOWN = """# Go-Zero 微服务框架入门指南

## 什么是 Go-Zero

go-zero 是一个集成了各种工程实践的 web 和 rpc 框架。通过弹性设计保障了大并发服务端的稳定性，经受了充分的实战检验。

## 核心特性

- **简单易用**: API 语法简洁，一键生成代码
- **弹性设计**: 熔断、降级、限流、自适应负载均衡
- **微服务治理**: 服务发现、链路追踪、监控告警
- **高性能**: 极简设计，极致性能

## 架构设计

本项目采用了 go-zero 推荐的微服务架构：

```
├── admin-api    # 管理后台服务
├── public-api   # 公开前台服务
└── common       # 共享模块
```

每个服务都遵循 go-zero 的最佳实践，具有清晰的分层结构。"""

GUIDE_HTML = """<h1>Go-Zero 微服务框架入门指南</h1>
<h2>什么是 Go-Zero</h2>
<p>go-zero 是一个集成了各种工程实践的 web 和 rpc 框架。通过弹性设计保障了大并发服务端的稳定性，经受了充分的实战检验。</p>"""

DRAFT_MARKDOWN = """# MongoDB 最佳实践

这是一篇草稿文章，正在编写中...

## 数据建模

- 优先内嵌，必要时引用
- 合理设计索引
- 避免深层嵌套

## 性能优化

待完善..."""

POSTS = [
    {
        "title": "欢迎使用 Heimdall 博客系统",
        "slug": "welcome-to-heimdall",
        "excerpt": "Heimdall 是一个基于 Go-Zero 框架开发的现代化博客系统，具有高性能、高可用、易扩展的特点。",
        "markdown": WELCOME_MARKDOWN,
        "html": WELCOME_HTML,
        "type": PostType.POST,
        "status": PostStatus.PUBLISHED,
        "visibility": PostVisibility.PUBLIC,
        "author": "admin",
        "tags": [
            {"name": "博客系统", "slug": "blog-system"},
            {"name": "Go语言", "slug": "golang"},
            {"name": "微服务", "slug": "microservices"},
        ],
        "meta_title": "欢迎使用 Heimdall 博客系统",
        "meta_description": "了解 Heimdall 博客系统的特点和使用方法",
        "reading_time": 2,
        "word_count": 186,
        "view_count": 100,
        "published": WELCOME_PUBLISHED,
        "created": WELCOME_PUBLISHED,
    },
    {
        "title": "Go-Zero 微服务框架入门指南",
        "slug": "go-zero-microservices-guide",
        "excerpt": "Go-Zero 是一个集成了各种工程实践的 web 和 rpc 框架。本文将详细介绍如何使用 go-zero 构建微服务应用。",
        "markdown": GUIDE_MARKDOWN,
        "html": GUIDE_HTML,
        "type": PostType.POST,
        "status": PostStatus.PUBLISHED,
        "visibility": PostVisibility.PUBLIC,
        "author": "author",
        "tags": [
            {"name": "Go语言", "slug": "golang"},
            {"name": "微服务", "slug": "microservices"},
            {"name": "go-zero", "slug": "go-zero"},
        ],
        "meta_title": "Go-Zero 微服务框架入门指南",
        "meta_description": "详细介绍 go-zero 框架的特性和使用方法",
        "reading_time": 5,
        "word_count": 324,
        "view_count": 256,
        "published": GUIDE_PUBLISHED,
        "created": GUIDE_PUBLISHED,
    },
    {
        "title": "MongoDB 最佳实践",
        "slug": "mongodb-best-practices",
        "excerpt": "分享在使用 MongoDB 过程中总结的最佳实践和经验教训。",
        "markdown": DRAFT_MARKDOWN,
        "html": "<h1>MongoDB 最佳实践</h1><p>这是一篇草稿文章，正在编写中...</p>",
        "type": PostType.POST,
        "status": PostStatus.DRAFT,
        "visibility": PostVisibility.PUBLIC,
        "author": "author",
        "tags": [
            {"name": "MongoDB", "slug": "mongodb"},
            {"name": "数据库", "slug": "database"},
        ],
        "reading_time": 3,
        "word_count": 45,
        "view_count": 0,
        "published": None,
        "created": timedelta(0),
    },
]

# "parent" names another entry of this list by index, or None for top-level
COMMENTS = [
    {
        "post": "welcome-to-heimdall",
        "author": None,
        "author_name": "张三",
        "author_email": "zhangsan@example.com",
        "content": "很不错的博客系统！期待更多功能。",
        "status": CommentStatus.APPROVED,
        "parent": None,
        "ip_address": "192.168.1.100",
        "user_agent": "Mozilla/5.0...",
        "like_count": 5,
        "created": WELCOME_PUBLISHED + HOUR,
    },
    {
        "post": "welcome-to-heimdall",
        "author": None,
        "author_name": "李四",
        "author_email": "lisi@example.com",
        "author_url": "https://lisi.blog",
        "content": "界面很简洁，用户体验不错。",
        "status": CommentStatus.APPROVED,
        "parent": None,
        "ip_address": "192.168.1.101",
        "user_agent": "Mozilla/5.0...",
        "like_count": 3,
        "created": WELCOME_PUBLISHED + 2 * HOUR,
    },
    {
        "post": "go-zero-microservices-guide",
        "author": "author",
        "author_name": "示例作者",
        "author_email": "author@heimdall.com",
        "content": "感谢大家的关注，后续会分享更多 go-zero 的实践经验。",
        "status": CommentStatus.APPROVED,
        "parent": None,
        "ip_address": "127.0.0.1",
        "user_agent": "Mozilla/5.0...",
        "like_count": 8,
        "created": GUIDE_PUBLISHED + HOUR,
    },
]

LOGIN_LOGS = [
    {
        "user": "admin",
        "username": "admin",
        "email": "admin@heimdall.com",
        "ip_address": "127.0.0.1",
        "user_agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
        "success": True,
        "created": timedelta(0),
    },
    {
        "user": "author",
        "username": "author",
        "email": "author@heimdall.com",
        "ip_address": "192.168.1.100",
        "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        "success": True,
        "created": -HOUR,
    },
    # unknown identity: never resolved to a user
    {
        "user": None,
        "username": "hacker",
        "email": "hacker@evil.com",
        "ip_address": "192.168.1.200",
        "user_agent": "curl/7.68.0",
        "success": False,
        "fail_reason": LoginFailReason.INVALID_CREDENTIALS,
        "created": -2 * HOUR,
    },
]
