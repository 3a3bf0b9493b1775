# jenkins/job_xml.py
# config.xml payloads posted to Jenkins createItem. Only the fields the
# import sets are templated; Jenkins fills in defaults for everything else.

from __future__ import annotations

from xml.sax.saxutils import escape

from ciimport.model import BuildJobDescriptor, GitInfo

FOLDER_CLASS = "com.cloudbees.hudson.plugins.folder.Folder"
MULTIBRANCH_CLASS = "org.jenkinsci.plugins.workflow.multibranch.WorkflowMultiBranchProject"

PIPELINE_SCRIPT_PATH = "Jenkinsfile"


def create_folder_xml(job_url: str, name: str) -> str:
    return f"""<?xml version='1.1' encoding='UTF-8'?>
<{FOLDER_CLASS} plugin="cloudbees-folder">
  <actions/>
  <description>{escape(f"Projects imported for {name} ({job_url})")}</description>
  <displayName>{escape(name)}</displayName>
  <properties/>
  <folderViews class="com.cloudbees.hudson.plugins.folder.views.DefaultFolderViewHolder">
    <views>
      <hudson.model.AllView>
        <owner class="{FOLDER_CLASS}" reference="../../../.."/>
        <name>All</name>
        <filterExecutors>false</filterExecutors>
        <filterQueue>false</filterQueue>
        <properties class="hudson.model.View$PropertyList"/>
      </hudson.model.AllView>
    </views>
    <tabBar class="hudson.views.DefaultViewsTabBar"/>
  </folderViews>
  <healthMetrics/>
  <icon class="com.cloudbees.hudson.plugins.folder.icons.StockFolderIcon"/>
</{FOLDER_CLASS}>
"""


def create_multibranch_project_xml(git_info: GitInfo, credentials: str) -> str:
    return f"""<?xml version='1.1' encoding='UTF-8'?>
<{MULTIBRANCH_CLASS} plugin="workflow-multibranch">
  <actions/>
  <description>{escape(git_info.full_name)}</description>
  <properties/>
  <folderViews class="jenkins.branch.MultiBranchProjectViewHolder" plugin="branch-api">
    <owner class="{MULTIBRANCH_CLASS}" reference="../.."/>
  </folderViews>
  <healthMetrics/>
  <icon class="jenkins.branch.MetadataActionFolderIcon" plugin="branch-api">
    <owner class="{MULTIBRANCH_CLASS}" reference="../.."/>
  </icon>
  <orphanedItemStrategy class="com.cloudbees.hudson.plugins.folder.computed.DefaultOrphanedItemStrategy" plugin="cloudbees-folder">
    <pruneDeadBranches>true</pruneDeadBranches>
    <daysToKeep>-1</daysToKeep>
    <numToKeep>-1</numToKeep>
  </orphanedItemStrategy>
  <triggers/>
  <sources class="jenkins.branch.MultiBranchProject$BranchSourceList" plugin="branch-api">
    <data>
      <jenkins.branch.BranchSource>
        <source class="jenkins.plugins.git.GitSCMSource" plugin="git">
          <id>{escape(git_info.full_name)}</id>
          <remote>{escape(git_info.url)}</remote>
          <credentialsId>{escape(credentials)}</credentialsId>
          <traits>
            <jenkins.plugins.git.traits.BranchDiscoveryTrait/>
          </traits>
        </source>
        <strategy class="jenkins.branch.DefaultBranchPropertyStrategy">
          <properties class="empty-list"/>
        </strategy>
      </jenkins.branch.BranchSource>
    </data>
    <owner class="{MULTIBRANCH_CLASS}" reference="../.."/>
  </sources>
  <factory class="org.jenkinsci.plugins.workflow.multibranch.WorkflowBranchProjectFactory">
    <owner class="{MULTIBRANCH_CLASS}" reference="../.."/>
    <scriptPath>{PIPELINE_SCRIPT_PATH}</scriptPath>
  </factory>
</{MULTIBRANCH_CLASS}>
"""


def build_job_descriptor(git_info: GitInfo, credentials: str) -> BuildJobDescriptor:
    return BuildJobDescriptor(
        folder=git_info.organisation,
        name=git_info.name,
        xml=create_multibranch_project_xml(git_info, credentials),
    )
