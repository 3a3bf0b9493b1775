# templates.py
# Files written into an imported project when it does not have its own.

DEFAULT_GITIGNORE = """\
.project
.classpath
.idea
.cache
.DS_Store
*.im?
target
work
"""

DEFAULT_JENKINSFILE = """\
pipeline {
  agent {
    label "jenkins-maven"
  }

  stages {
    stage('Build Release') {
      steps {
        container('maven') {
          sh "mvn versions:set -DnewVersion=\\$(jx-release-version)"
          sh "mvn clean deploy"
        }
      }
    }
    stage('Deploy Staging') {
      when {
        branch 'master'
      }
      steps {
        container('maven') {
          sh 'make release'
        }
      }
    }
  }
}
"""
