"""Platform-specific remediation copy, keyed by platform, rule id and audience."""
from typing import Dict

GUIDES: Dict[str, Dict[str, Dict[str, str]]] = {
    "webflow": {
        "image-alt": {
            "founder": (
                "**In Webflow Editor:**\n"
                "1. Click on the image\n"
                "2. Look for the \"Alt Text\" field in the right panel\n"
                "3. Add a clear description of what's in the image\n"
                "4. Publish your site\n\n"
                "💡 Tip: Describe what you'd tell someone who can't see the image."
            ),
            "developer": (
                "**Webflow CMS:**\n"
                "```javascript\n"
                "// Set alt text via CMS field\n"
                "$('img[data-cms=\"image\"]').attr('alt', cmsAltText);\n"
                "```\n\n"
                "Or in Designer:\n"
                "1. Select image → Settings → Alt Text\n"
                "2. For dynamic content, use CMS field binding"
            ),
        },
        "button-name": {
            "founder": (
                "**Fix Button Labels:**\n"
                "1. Select the button in Webflow\n"
                "2. Change button text to be descriptive (e.g., \"Submit Form\" instead of \"Click Here\")\n"
                "3. For icon-only buttons, add an aria-label in the custom attributes\n\n"
                "💡 Good: \"Add to Cart\" | Bad: \"Click\""
            ),
            "developer": (
                "**Webflow Custom Attributes:**\n"
                "1. Select element → Settings → Custom Attributes\n"
                "2. Add: `aria-label=\"Descriptive text\"`\n"
                "3. For links: `<a aria-label=\"Read full article about...\"`\n\n"
                "```html\n"
                "<!-- Before -->\n<button></button>\n"
                "<!-- After -->\n<button aria-label=\"Submit form\">→</button>\n"
                "```"
            ),
        },
        "color-contrast": {
            "founder": (
                "**Improve Color Contrast:**\n"
                "1. Click on the text element\n"
                "2. In the Style panel, adjust text color\n"
                "3. Aim for darker text on light backgrounds\n"
                "4. Check your colors at https://webaim.org/resources/contrastchecker/\n\n"
                "✅ Good: #333 text on #FFF background\n"
                "❌ Bad: #999 text on #FFF background"
            ),
            "developer": (
                "**Contrast Requirements:**\n"
                "- Normal text: 4.5:1 ratio minimum\n"
                "- Large text (18pt+): 3:1 ratio\n\n"
                "In Webflow:\n"
                "1. Create reusable color styles\n"
                "2. Use WCAG AAA colors: #000, #333, #666 for text\n"
                "3. Update all class instances\n\n"
                "```css\n"
                ".text { color: #1a1a1a; /* 16.9:1 */ }\n"
                ".bg { background: #ffffff; }\n"
                "```"
            ),
        },
    },
    "wordpress": {
        "image-alt": {
            "founder": (
                "**In WordPress Media Library:**\n"
                "1. Go to Media Library\n"
                "2. Click on the image\n"
                "3. Fill in the \"Alternative Text\" field\n"
                "4. Update\n\n"
                "💡 Install an alt text plugin for bulk updates"
            ),
            "developer": (
                "**WordPress Hooks:**\n"
                "```php\n"
                "add_filter('wp_get_attachment_image_attributes', function($attr, $attachment) {\n"
                "  if (empty($attr['alt'])) {\n"
                "    $attr['alt'] = get_the_title($attachment);\n"
                "  }\n"
                "  return $attr;\n"
                "}, 10, 2);\n"
                "```"
            ),
        },
        "button-name": {
            "founder": (
                "**Fix Links & Buttons:**\n"
                "1. Edit the page/post\n"
                "2. Select the button/link\n"
                "3. Change text to be descriptive\n"
                "4. For icon buttons, use an accessibility plugin to add labels\n\n"
                "💡 Plugin: \"WP Accessibility\" (free)"
            ),
            "developer": (
                "**Theme Functions:**\n"
                "```php\n"
                "add_filter('nav_menu_link_attributes', function($atts) {\n"
                "  if (empty($atts['aria-label']) && !empty($atts['title'])) {\n"
                "    $atts['aria-label'] = $atts['title'];\n"
                "  }\n"
                "  return $atts;\n"
                "});\n"
                "```\n\n"
                "For Gutenberg blocks, use `supports.html` to allow aria attributes."
            ),
        },
        "color-contrast": {
            "founder": (
                "**Fix Colors:**\n"
                "1. Go to Appearance → Customize → Colors\n"
                "2. Choose darker text colors\n"
                "3. Or install an accessibility checker plugin to flag contrast issues\n\n"
                "✅ Recommended: Use the theme's darker text palette even in light mode"
            ),
            "developer": (
                "**CSS Override:**\n"
                "```css\n"
                "/* Additional CSS or child theme */\n"
                "body { color: #1a1a1a; }\n"
                ".entry-content { color: #333; }\n"
                "a { color: #0066cc; }\n"
                "a:hover { color: #004499; }\n"
                "```\n\n"
                "Use `wp_add_inline_style()` to inject fixes programmatically."
            ),
        },
    },
    "framer": {
        "image-alt": {
            "founder": (
                "**In Framer:**\n"
                "1. Select the image in the canvas\n"
                "2. Look for \"Alt Text\" in the right properties panel\n"
                "3. Type a description\n"
                "4. Publish\n\n"
                "💡 For image components, set the alt text prop"
            ),
            "developer": (
                "**Framer Code Component:**\n"
                "```tsx\n"
                "export default function ImageComponent({ alt, src }) {\n"
                "  return <img src={src} alt={alt} />\n"
                "}\n"
                "```\n\n"
                "For image layers, use the \"Alt\" property in the design panel."
            ),
        },
        "button-name": {
            "founder": (
                "**Fix Buttons:**\n"
                "1. Select the button/link\n"
                "2. If it's text, make the text descriptive\n"
                "3. For icon-only buttons, add a text layer that is hidden visually but kept for screen readers"
            ),
            "developer": (
                "**Framer Override:**\n"
                "```tsx\n"
                "export function addAriaLabel(Component): ComponentType {\n"
                "  return (props) => <Component {...props} aria-label=\"Your description\" />\n"
                "}\n"
                "```\n\n"
                "Apply the override to icon buttons via the canvas."
            ),
        },
        "color-contrast": {
            "founder": (
                "**Fix Colors:**\n"
                "1. Select the text layer\n"
                "2. Change the fill color to a darker shade\n"
                "3. Check it at https://webaim.org/resources/contrastchecker/\n\n"
                "✅ Framer tip: Create color variables for consistent WCAG colors"
            ),
            "developer": (
                "**Color Variables:**\n"
                "```tsx\n"
                "const colors = {\n"
                "  text: '#1a1a1a',          // 16.9:1\n"
                "  textSecondary: '#4a4a4a', // 10.4:1\n"
                "  link: '#0066cc'           // 7.7:1\n"
                "}\n"
                "```\n\n"
                "Apply via overrides or component props."
            ),
        },
    },
}


def get_platform_guide(platform: str, issue_type: str, mode: str) -> str:
    """
    Step-by-step fix for ``issue_type`` on ``platform`` written for ``mode``.

    Never raises: unknown platforms, rules or modes fall back to generic copy.
    """
    platform_guides = GUIDES.get((platform or "").lower())
    if not platform_guides:
        return "Platform-specific guide not available yet. General accessibility guidelines apply."

    issue_guide = platform_guides.get(issue_type or "")
    if not issue_guide:
        return f'Guide for "{issue_type}" not available for {platform} yet.'

    return issue_guide.get(mode) or issue_guide["founder"]


def has_guides(platform: str) -> bool:
    return (platform or "").lower() in GUIDES
