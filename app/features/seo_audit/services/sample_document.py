"""Fixed demo page analyzed when no live document is available."""

SAMPLE_URL = "https://ospranto.tech"

SAMPLE_MARKUP = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Best Digital Marketing Agency in Bangladesh - OSPranto Tech</title>
  <meta name="description" content="OSPranto Tech is the leading digital marketing agency in Bangladesh. We offer SEO, web development, and social media marketing services.">
  <meta name="keywords" content="digital marketing, SEO, web development, Bangladesh">
  <link rel="canonical" href="https://ospranto.tech/">
  <meta property="og:title" content="OSPranto Tech - Digital Marketing Agency">
  <meta property="og:description" content="Leading digital marketing agency in Bangladesh">
  <meta property="og:image" content="https://ospranto.tech/og-image.jpg">
  <meta property="og:url" content="https://ospranto.tech/">
  <meta property="og:type" content="website">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:title" content="OSPranto Tech - Digital Marketing Agency">
  <meta name="twitter:description" content="Leading digital marketing agency in Bangladesh">
  <link rel="icon" href="/favicon.ico">
</head>
<body>
  <header>
    <nav>
      <a href="/">Home</a>
      <a href="/services">Services</a>
      <a href="/about">About</a>
      <a href="/contact">Contact</a>
    </nav>
  </header>
  
  <main>
    <h1>Best Digital Marketing Agency in Bangladesh</h1>
    
    <p>Welcome to OSPranto Tech, the leading digital marketing agency in Bangladesh. We help businesses grow their online presence through strategic SEO, web development, and social media marketing services.</p>
    
    <h2>Our Services</h2>
    <p>We offer a comprehensive range of digital marketing services designed to help your business succeed online. Our team of experts uses the latest tools and techniques to deliver measurable results.</p>
    
    <ul>
      <li><strong>Search Engine Optimization (SEO)</strong> - Improve your website ranking</li>
      <li><strong>Web Development</strong> - Build modern, responsive websites</li>
      <li><strong>Social Media Marketing</strong> - Grow your social presence</li>
      <li><strong>Content Marketing</strong> - Create engaging content</li>
    </ul>
    
    <h2>Why Choose Us?</h2>
    <p>With years of experience in digital marketing, we understand what it takes to succeed online. Our data-driven approach ensures that every campaign is optimized for maximum results.</p>
    
    <h3>Our Expertise</h3>
    <p>Our team consists of certified professionals with expertise in all areas of digital marketing. We stay up-to-date with the latest industry trends and best practices.</p>
    
    <h3>Client Success</h3>
    <p>We have helped hundreds of businesses achieve their online goals. Our clients include small businesses, startups, and established enterprises across various industries.</p>
    
    <h2>Get Started Today</h2>
    <p>Ready to take your business to the next level? Contact us today for a free consultation and discover how we can help you achieve your digital marketing goals.</p>
    
    <img src="/team-photo.jpg" alt="OSPranto Tech Team - Digital Marketing Experts" width="800" height="400" loading="lazy">
  </main>
  
  <footer>
    <p>&copy; 2024 OSPranto Tech. All rights reserved.</p>
    <a href="https://github.com/OSPrantoTech" target="_blank" rel="noopener">GitHub</a>
    <a href="https://twitter.com/ospranto" target="_blank" rel="noopener">Twitter</a>
  </footer>
</body>
</html>
"""


def sample_document():
    """(markup, url) pair of the demo page."""
    return SAMPLE_MARKUP, SAMPLE_URL
